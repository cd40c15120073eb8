"""
组织架构系统主入口
集成配置、成员树仓库和布局引擎，提供接口层使用的管理方法
每个方法返回 {"success": ...} 形式的结果字典
"""

import logging
from typing import Dict, Any, Optional
from datetime import datetime

from .config.settings import SystemSettings
from .config.validator import MemberValidator
from .core.ids import IncrementalIdAllocator
from .core.node import MemberFields, MemberUpdate
from .core.tree import TreeStore, OperationResult
from .exceptions import MemberError, NodeNotFoundError, ValidationError
from .layout import LayoutEngine, LayoutResult


class OrgChartSystem:
    """
    组织架构系统主类

    由调用方显式创建一次，持有唯一的 TreeStore；
    TreeStore 和 LayoutEngine 互不调用，布局只读取树快照
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        初始化系统

        Args:
            config: 系统配置字典，见 SystemSettings
        """
        # 加载配置
        self.settings = SystemSettings.from_dict(config) if config else SystemSettings()

        # 初始化日志
        self._setup_logging()
        self.logger = logging.getLogger(__name__)

        # 核心组件
        self._id_allocator = IncrementalIdAllocator(prefix=self.settings.id_prefix)
        self.store = TreeStore(
            root_fields=self.settings.root_fields(),
            id_allocator=self._id_allocator,
            validator=MemberValidator(),
            default_avatar=self.settings.default_avatar,
            default_email=self.settings.default_email
        )
        self.layout_engine = LayoutEngine(**self.settings.layout_options())

        self._start_time = datetime.now()
        self.logger.info(f"{self.settings.system_name} 初始化完成")

    def _setup_logging(self):
        """配置日志系统"""
        handlers = [logging.StreamHandler()]
        if self.settings.log_file:
            handlers.append(logging.FileHandler(self.settings.log_file, encoding="utf-8"))

        logging.basicConfig(
            level=getattr(logging, self.settings.log_level),
            format=self.settings.log_format,
            handlers=handlers
        )

    @staticmethod
    def _failure(error: MemberError) -> Dict[str, Any]:
        return OperationResult.fail(error).to_payload()

    # ========== 成员管理 ==========

    def create_member(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        新建成员

        Args:
            payload: {name, title, department, avatar?, email?, parentId}
        """
        parent_id = payload.get("parentId")
        result = self.store.create(parent_id, MemberFields.from_dict(payload))
        return result.to_payload()

    def update_member(self, member_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        部分更新成员

        Args:
            member_id: 成员ID
            payload: {name?, title?, department?, avatar?, email?}
        """
        try:
            update = MemberUpdate.from_dict(payload)
        except ValidationError as e:
            self.logger.warning(f"更新请求无效: {e}")
            return self._failure(e)

        return self.store.update(member_id, update).to_payload()

    def delete_member(self, member_id: str) -> Dict[str, Any]:
        """删除成员（只允许无下属的非根成员）"""
        return self.store.delete(member_id).to_payload()

    def move_member(self, member_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        移动成员到新的上级

        Args:
            member_id: 成员ID
            payload: {newParentId}
        """
        new_parent_id = payload.get("newParentId")
        if not new_parent_id:
            return self._failure(ValidationError(
                message="Missing required field: newParentId",
                field="newParentId",
                value=new_parent_id
            ))

        return self.store.move(member_id, new_parent_id).to_payload()

    def get_member(self, member_id: str) -> Dict[str, Any]:
        """读取单个成员"""
        node = self.store.read(member_id)
        if node is None:
            return self._failure(NodeNotFoundError(member_id))
        return {"success": True, "member": node.to_dict()}

    def list_members(self) -> Dict[str, Any]:
        """前序列出全部成员（不嵌套子树）"""
        members = [node.to_dict(include_children=False) for node in self.store.list()]
        return {"success": True, "members": members, "total": len(members)}

    # ========== 树与布局 ==========

    def get_tree(self) -> Dict[str, Any]:
        """整棵树及统计"""
        tree, stats = self.store.snapshot_with_stats()
        return {
            "success": True,
            "tree": tree.to_dict(),
            "stats": stats
        }

    def compute_layout(self) -> LayoutResult:
        """基于当前树快照计算布局"""
        return self.layout_engine.layout(self.store.snapshot())

    def get_layout(self) -> Dict[str, Any]:
        """布局结果（节点坐标和连线）"""
        layout = self.compute_layout().to_dict()
        return {"success": True, "nodes": layout["nodes"], "edges": layout["edges"]}

    # ========== 系统信息 ==========

    def get_system_info(self) -> Dict[str, Any]:
        """获取系统信息"""
        return {
            "system_name": self.settings.system_name,
            "version": self.settings.version,
            "uptime": str(datetime.now() - self._start_time),
            "member_count": self.store.count(),
            "root_id": self.store.root_id
        }
