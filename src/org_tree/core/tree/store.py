"""
成员树仓库
持有唯一的根节点，提供增删改查和移动操作，并保证树结构不变量：
1. 只有根节点没有父节点
2. 每个节点从根出发恰好可达一次（无共享、无环）
3. 非根节点的 parent_id 与其所在的 children 一致
4. 所有ID互不相同
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Tuple, Union

from ..node.entity import OrgNode
from ..node.factory import NodeFactory
from ..node.fields import MemberFields, MemberUpdate
from ..ids.allocator import IncrementalIdAllocator
from ...config.validator import MemberValidator
from ...interfaces import IIdAllocator
from ...exceptions import (
    MemberError, ErrorCategory, FailureReason,
    NodeNotFoundError, ParentNotFoundError, IntegrityError, ValidationError
)
from .guard import is_descendant
from .locator import flatten, find_parent, iter_preorder, tree_depth


logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """操作结果：成功时携带节点副本，失败时携带错误"""
    success: bool
    node: Optional[OrgNode] = None
    error: Optional[MemberError] = None

    @classmethod
    def ok(cls, node: Optional[OrgNode] = None) -> 'OperationResult':
        return cls(success=True, node=node)

    @classmethod
    def fail(cls, error: MemberError) -> 'OperationResult':
        return cls(success=False, error=error)

    @property
    def category(self) -> Optional[ErrorCategory]:
        return self.error.category if self.error else None

    @property
    def reason(self) -> Optional[FailureReason]:
        return self.error.reason if self.error else None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None

    def to_payload(self, key: str = "member") -> Dict[str, Any]:
        """转换为接口返回体"""
        if not self.success:
            return {
                "success": False,
                "error": self.error.message,
                "code": self.error.code,
                "reason": self.error.reason.value,
            }

        payload: Dict[str, Any] = {"success": True}
        if self.node is not None:
            payload[key] = self.node.to_dict()
        return payload

    def __bool__(self) -> bool:
        return self.success


class TreeStore:
    """
    成员树仓库

    所有公开操作在同一把锁内执行：写操作的 读取-验证-修改 不会交错，
    读操作拿到的是分离的副本，不会看到修改到一半的树
    """

    def __init__(
        self,
        root_fields: Dict[str, Any],
        id_allocator: Optional[IIdAllocator] = None,
        validator: Optional[MemberValidator] = None,
        default_avatar: str = "👤",
        default_email: Optional[str] = ""
    ):
        """
        初始化成员树仓库

        Args:
            root_fields: 根节点字段（name, title, department 必填）
            id_allocator: ID分配器，默认使用 IncrementalIdAllocator
            validator: 字段验证器
            default_avatar: 未指定头像时的占位符
            default_email: 未指定邮箱时的默认值

        Raises:
            ValidationError: 根节点字段无效
        """
        self._lock = threading.RLock()
        self._id_allocator = id_allocator or IncrementalIdAllocator()
        self._validator = validator or MemberValidator()
        self._factory = NodeFactory(
            self._id_allocator,
            default_avatar=default_avatar,
            default_email=default_email
        )

        root = self._factory.create_root_node(self._validator.validate_create(root_fields))
        self._root = root
        self._nodes: Dict[str, OrgNode] = {root.node_id: root}

        logger.info(f"成员树初始化完成，根节点: {root.node_id} ({root.name})")

    # ========== 基本属性 ==========

    @property
    def root_id(self) -> str:
        return self._root.node_id

    def count(self) -> int:
        """成员总数"""
        with self._lock:
            return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        if not isinstance(node_id, str):
            return False
        with self._lock:
            return node_id in self._nodes

    @staticmethod
    def _check_id(value: Any, field: str) -> str:
        """请求中的ID必须是非空字符串"""
        if value is None or value == "":
            raise ValidationError(
                message=f"Missing required field: {field}",
                field=field,
                value=value,
                reason=FailureReason.MISSING_FIELD
            )
        if not isinstance(value, str):
            raise ValidationError(
                message=f"Field must be a string: {field}",
                field=field,
                value=repr(value)
            )
        return value

    def _require(self, node_id: Any, field: str = "id") -> OrgNode:
        node = self._nodes.get(self._check_id(node_id, field))
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    # ========== 写操作 ==========

    def create(self, parent_id: Optional[str],
               fields: Union[MemberFields, Dict[str, Any]]) -> OperationResult:
        """
        在父节点下新建成员，追加到 children 末尾

        失败: ValidationError（必填字段或 parentId 缺失）, ParentNotFound
        """
        data = fields.to_dict() if isinstance(fields, MemberFields) else dict(fields)

        with self._lock:
            try:
                validated = self._validator.validate_create(data)
                parent = self._nodes.get(self._check_id(parent_id, "parentId"))
                if parent is None:
                    raise ParentNotFoundError(parent_id)
            except MemberError as e:
                logger.warning(f"新建成员失败: {e}")
                return OperationResult.fail(e)

            # 验证全部通过后再分配ID和挂接
            node = self._factory.create_child_node(parent, validated)
            parent.add_child(node)
            self._nodes[node.node_id] = node

            logger.info(f"新建成员: {node.node_id} ({node.name}) -> 父节点 {parent.node_id}")
            return OperationResult.ok(node.clone())

    def update(self, node_id: str,
               partial: Union[MemberUpdate, Dict[str, Any]]) -> OperationResult:
        """
        合并更新展示字段，只应用出现的字段

        不带任何字段的更新视为无操作，返回原节点
        失败: NotFound, ValidationError
        """
        with self._lock:
            try:
                node = self._require(node_id)
                if not isinstance(partial, MemberUpdate):
                    partial = MemberUpdate.from_dict(partial)
                changes = self._validator.validate_update(partial.present())
            except MemberError as e:
                logger.warning(f"更新成员失败: {e}")
                return OperationResult.fail(e)

            if not changes:
                logger.debug(f"空更新，成员保持不变: {node_id}")
                return OperationResult.ok(node.clone())

            node.apply_changes(changes)
            logger.info(f"更新成员: {node_id} 字段={sorted(changes)}")
            return OperationResult.ok(node.clone())

    def delete(self, node_id: str) -> OperationResult:
        """
        删除叶子成员

        失败: IsRoot, NotFound, HasChildren（需先移走或删除下属）
        """
        with self._lock:
            try:
                if node_id == self._root.node_id:
                    raise IntegrityError(
                        "Cannot delete the root member",
                        reason=FailureReason.IS_ROOT,
                        node_id=node_id
                    )
                node = self._require(node_id)
                if node.children:
                    raise IntegrityError(
                        f"Member has {len(node.children)} direct report(s); "
                        f"move or delete them first",
                        reason=FailureReason.HAS_CHILDREN,
                        node_id=node_id
                    )
                parent = self._nodes[node.parent_id]
            except MemberError as e:
                logger.warning(f"删除成员失败: {e}")
                return OperationResult.fail(e)

            parent.remove_child(node_id)
            del self._nodes[node_id]

            logger.info(f"删除成员: {node_id} ({node.name})")
            return OperationResult.ok()

    def move(self, node_id: str, new_parent_id: str) -> OperationResult:
        """
        把成员（连同子树）移到新的父节点下，追加到其 children 末尾

        失败: IsRoot, SelfTarget, NotFound, DescendantCycle
        任何检查失败时树保持不变
        """
        with self._lock:
            try:
                self._check_id(node_id, "id")
                self._check_id(new_parent_id, "newParentId")
                if node_id == self._root.node_id:
                    raise IntegrityError(
                        "Cannot move the root member",
                        reason=FailureReason.IS_ROOT,
                        node_id=node_id
                    )
                if node_id == new_parent_id:
                    raise IntegrityError(
                        "Cannot move a member under itself",
                        reason=FailureReason.SELF_TARGET,
                        node_id=node_id,
                        target_id=new_parent_id
                    )
                node = self._require(node_id)
                new_parent = self._require(new_parent_id, "newParentId")
                if is_descendant(node, new_parent_id):
                    raise IntegrityError(
                        "Cannot move a member under one of its own reports",
                        reason=FailureReason.DESCENDANT_CYCLE,
                        node_id=node_id,
                        target_id=new_parent_id
                    )
                old_parent = self._nodes[node.parent_id]
            except MemberError as e:
                logger.warning(f"移动成员失败: {e}")
                return OperationResult.fail(e)

            old_parent.remove_child(node_id)
            new_parent.add_child(node)

            logger.info(f"移动成员: {node_id} {old_parent.node_id} -> {new_parent_id}")
            return OperationResult.ok(node.clone())

    # ========== 读操作 ==========

    def read(self, node_id: str) -> Optional[OrgNode]:
        """按ID读取成员副本，不存在返回None"""
        if not isinstance(node_id, str):
            return None
        with self._lock:
            node = self._nodes.get(node_id)
            return node.clone() if node is not None else None

    def list(self) -> List[OrgNode]:
        """前序展开的全部成员（副本）"""
        with self._lock:
            return flatten(self._root.clone())

    def snapshot(self) -> OrgNode:
        """整棵树的分离副本，供布局和渲染使用"""
        with self._lock:
            return self._root.clone()

    def snapshot_with_stats(self) -> Tuple[OrgNode, Dict[str, Any]]:
        """在同一次加锁内取得树副本和统计，二者一致"""
        with self._lock:
            return self._root.clone(), self.stats()

    def stats(self) -> Dict[str, Any]:
        """
        统计信息

        Returns:
            {
                'total': 成员总数,
                'depth': 最大深度（根为0）,
                'departments': 各部门人数（按前序首次出现排序）
            }
        """
        with self._lock:
            departments: Dict[str, int] = {}
            for node, _ in iter_preorder(self._root):
                departments[node.department] = departments.get(node.department, 0) + 1

            return {
                'total': len(self._nodes),
                'depth': tree_depth(self._root),
                'departments': departments
            }

    def parent_options(self, exclude_subtree_of: Optional[str] = None) -> List[Dict[str, str]]:
        """
        可作为上级的成员列表

        Args:
            exclude_subtree_of: 排除该成员及其子树（移动时的非法目标）
        """
        with self._lock:
            excluded = set()
            if exclude_subtree_of in self._nodes:
                excluded = {n.node_id for n in flatten(self._nodes[exclude_subtree_of])}

            return [
                {'id': node.node_id, 'name': node.name, 'title': node.title}
                for node, _ in iter_preorder(self._root)
                if node.node_id not in excluded
            ]

    # ========== 完整性检查 ==========

    def check_integrity(self) -> List[str]:
        """
        检查全部树结构不变量

        Returns:
            问题描述列表，空列表表示健康
        """
        with self._lock:
            problems: List[str] = []

            if self._root.parent_id is not None:
                problems.append(f"根节点存在父节点: {self._root.parent_id}")

            # 带去重的遍历，防止损坏的树形成死循环
            seen: Dict[str, OrgNode] = {}
            stack = [self._root]
            while stack:
                node = stack.pop()
                if node.node_id in seen:
                    problems.append(f"节点重复可达: {node.node_id}")
                    continue
                seen[node.node_id] = node
                for child in node.children:
                    if child.parent_id != node.node_id:
                        problems.append(
                            f"父节点引用不一致: {child.node_id}.parent_id="
                            f"{child.parent_id}, 实际位于 {node.node_id}"
                        )
                    if child.parent_id is None:
                        problems.append(f"非根节点没有父节点: {child.node_id}")
                    stack.append(child)

            if set(seen) != set(self._nodes):
                missing = sorted(set(self._nodes) - set(seen))
                extra = sorted(set(seen) - set(self._nodes))
                problems.append(f"索引与树不一致: 不可达={missing}, 未索引={extra}")

            if not problems:
                for node_id, node in seen.items():
                    if node_id == self._root.node_id:
                        continue
                    parent = find_parent(self._root, node_id)
                    if parent is None or parent.node_id != node.parent_id:
                        problems.append(f"父节点查找不一致: {node_id}")

            if problems:
                logger.debug(f"完整性检查发现 {len(problems)} 个问题: {problems}")
            return problems

    def __repr__(self) -> str:
        return f"TreeStore(root={self._root.node_id}, members={len(self._nodes)})"
