"""
节点工厂 - 创建成员节点
"""
from typing import Dict, Any, Optional

from ...interfaces import IIdAllocator
from .entity import OrgNode


class NodeFactory:
    """节点工厂，负责分配ID并填充默认值"""

    def __init__(
        self,
        id_allocator: IIdAllocator,
        default_avatar: str = "👤",
        default_email: Optional[str] = ""
    ):
        """
        初始化节点工厂

        Args:
            id_allocator: ID分配器
            default_avatar: 未指定头像时的占位符
            default_email: 未指定邮箱时的默认值
        """
        self._id_allocator = id_allocator
        self._default_avatar = default_avatar
        self._default_email = default_email

    def create_root_node(self, fields: Dict[str, Any]) -> OrgNode:
        """创建根节点（无父节点）"""
        return self._build(fields, parent_id=None)

    def create_child_node(self, parent_node: OrgNode, fields: Dict[str, Any]) -> OrgNode:
        """
        创建子节点，不挂接到父节点

        挂接由调用方在验证全部通过后完成
        """
        return self._build(fields, parent_id=parent_node.node_id)

    def _build(self, fields: Dict[str, Any], parent_id: Optional[str]) -> OrgNode:
        node_id = self._id_allocator.allocate()

        avatar = fields.get("avatar") or self._default_avatar
        email = fields.get("email")
        if email is None:
            email = self._default_email

        return OrgNode(
            node_id=node_id,
            name=fields["name"],
            title=fields["title"],
            department=fields["department"],
            avatar=avatar,
            email=email,
            parent_id=parent_id
        )
