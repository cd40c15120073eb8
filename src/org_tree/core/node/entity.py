"""
组织成员实体模块
定义组织架构树中的成员节点
"""

from typing import Optional, Dict, Any, List


class OrgNode:
    """
    组织成员节点 - 组织架构树中唯一的实体

    每个节点包含：
    1. 身份信息：node_id（创建后不可变）
    2. 展示信息：name, title, department, avatar, email
    3. 树关系：parent_id（父节点ID的反向引用）, children（有序子节点）

    children 的顺序即插入顺序，决定布局时从左到右的位置
    """

    def __init__(
        self,
        node_id: str,
        name: str,
        title: str,
        department: str,
        avatar: str = "",
        email: Optional[str] = None,
        parent_id: Optional[str] = None
    ):
        # ========== 身份信息 ==========
        self._node_id = node_id

        # ========== 展示信息 ==========
        self.name = name
        self.title = title
        self.department = department
        self.avatar = avatar
        self.email = email

        # ========== 树结构关系 ==========
        self.parent_id: Optional[str] = parent_id
        self.children: List['OrgNode'] = []

    @property
    def node_id(self) -> str:
        """成员ID（只读）"""
        return self._node_id

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    # ========== 树结构管理 ==========

    def add_child(self, child_node: 'OrgNode') -> None:
        """追加子节点到末尾，并改写其父节点引用"""
        self.children.append(child_node)
        child_node.parent_id = self._node_id

    def remove_child(self, child_id: str) -> Optional['OrgNode']:
        """按ID移除子节点，返回被移除的节点"""
        for index, child in enumerate(self.children):
            if child.node_id == child_id:
                return self.children.pop(index)
        return None

    def child_ids(self) -> List[str]:
        return [child.node_id for child in self.children]

    # ========== 字段更新 ==========

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        """应用已验证的展示字段（不涉及ID和拓扑）"""
        for key in ("name", "title", "department", "avatar", "email"):
            if key in changes:
                setattr(self, key, changes[key])

    # ========== 复制 ==========

    def copy_shallow(self) -> 'OrgNode':
        """复制本节点字段，不含子节点"""
        return OrgNode(
            node_id=self._node_id,
            name=self.name,
            title=self.title,
            department=self.department,
            avatar=self.avatar,
            email=self.email,
            parent_id=self.parent_id
        )

    def clone(self) -> 'OrgNode':
        """
        深拷贝整棵子树，返回与原树完全分离的副本

        使用显式栈，避免深树递归溢出
        """
        root_copy = self.copy_shallow()
        stack = [(self, root_copy)]

        while stack:
            original, copy = stack.pop()
            for child in original.children:
                child_copy = child.copy_shallow()
                copy.children.append(child_copy)
                stack.append((child, child_copy))

        return root_copy

    # ========== 序列化 ==========

    def to_dict(self, include_children: bool = True) -> Dict[str, Any]:
        """
        序列化节点

        Args:
            include_children: 是否嵌套包含整棵子树；否则只给出子节点ID列表

        Returns:
            可JSON序列化的字典，键名与接口保持一致（id, parentId）
        """
        def fields(node: 'OrgNode') -> Dict[str, Any]:
            return {
                'id': node.node_id,
                'name': node.name,
                'title': node.title,
                'department': node.department,
                'avatar': node.avatar,
                'email': node.email,
                'parentId': node.parent_id,
            }

        result = fields(self)
        if not include_children:
            result['children'] = self.child_ids()
            return result

        result['children'] = []
        stack = [(self, result)]
        while stack:
            node, node_dict = stack.pop()
            for child in node.children:
                child_dict = fields(child)
                child_dict['children'] = []
                node_dict['children'].append(child_dict)
                stack.append((child, child_dict))

        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrgNode':
        """
        反序列化创建节点（含嵌套子树）

        子节点的 parentId 一律以所在位置为准
        """
        def build(item: Dict[str, Any], parent_id: Optional[str]) -> 'OrgNode':
            return cls(
                node_id=item['id'],
                name=item['name'],
                title=item['title'],
                department=item['department'],
                avatar=item.get('avatar', ''),
                email=item.get('email'),
                parent_id=parent_id
            )

        root = build(data, data.get('parentId'))
        stack = [(data, root)]
        while stack:
            item, node = stack.pop()
            for child_item in item.get('children') or []:
                if not isinstance(child_item, dict):
                    # 仅有ID列表时无法重建子树
                    continue
                child = build(child_item, node.node_id)
                node.children.append(child)
                stack.append((child_item, child))

        return root

    # ========== 特殊方法 ==========

    def __repr__(self) -> str:
        return (f"OrgNode({self.node_id}, name={self.name!r}, "
                f"children={len(self.children)})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, OrgNode):
            return False
        return self.node_id == other.node_id

    def __hash__(self) -> int:
        return hash(self.node_id)
