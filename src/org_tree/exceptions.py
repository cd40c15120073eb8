"""
组织架构树异常体系
"""
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional


class ErrorCategory(str, Enum):
    """错误类别（稳定，可供程序判断）"""
    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTEGRITY = "INTEGRITY_ERROR"


class FailureReason(str, Enum):
    """具体失败原因"""
    MISSING_FIELD = "MissingField"
    INVALID_FIELD = "InvalidField"
    PARENT_NOT_FOUND = "ParentNotFound"
    NOT_FOUND = "NotFound"
    IS_ROOT = "IsRoot"
    HAS_CHILDREN = "HasChildren"
    SELF_TARGET = "SelfTarget"
    DESCENDANT_CYCLE = "DescendantCycle"


class BaseError(Exception):
    """所有异常的基类"""
    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.context = context or {}
        self.timestamp = datetime.now()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典，便于序列化"""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# ==================== 配置异常 ====================
class ConfigError(BaseError):
    """配置错误"""
    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details, **kwargs)


# ==================== 成员操作异常 ====================
class MemberError(BaseError):
    """成员操作错误基类，携带类别和原因"""
    category: ErrorCategory = ErrorCategory.VALIDATION

    def __init__(self, message: str, reason: FailureReason,
                 details: Optional[Dict[str, Any]] = None, **kwargs):
        self.reason = reason
        details = dict(details or {})
        details["reason"] = reason.value
        super().__init__(message, code=self.category.value, details=details, **kwargs)


class ValidationError(MemberError):
    """字段验证错误"""
    category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        reason: FailureReason = FailureReason.INVALID_FIELD,
        **kwargs
    ):
        details = {
            "field": field,
            "value": value,
        }
        self.field = field
        super().__init__(message, reason=reason, details=details, **kwargs)


class NotFoundError(MemberError):
    """引用的节点不存在"""
    category = ErrorCategory.NOT_FOUND


class NodeNotFoundError(NotFoundError):
    """成员不存在"""
    def __init__(self, node_id: Optional[str], **kwargs):
        super().__init__(
            message=f"Member not found: {node_id}",
            reason=FailureReason.NOT_FOUND,
            details={"node_id": node_id},
            **kwargs
        )


class ParentNotFoundError(NotFoundError):
    """父节点不存在"""
    def __init__(self, parent_id: Optional[str], **kwargs):
        super().__init__(
            message=f"Parent member not found: {parent_id}",
            reason=FailureReason.PARENT_NOT_FOUND,
            details={"parent_id": parent_id},
            **kwargs
        )


class IntegrityError(MemberError):
    """操作会破坏树结构不变量"""
    category = ErrorCategory.INTEGRITY

    def __init__(self, message: str, reason: FailureReason,
                 node_id: Optional[str] = None, target_id: Optional[str] = None, **kwargs):
        details = {"node_id": node_id}
        if target_id is not None:
            details["target_id"] = target_id
        super().__init__(message, reason=reason, details=details, **kwargs)


# ==================== 导入异常 ====================
class RosterImportError(BaseError):
    """名册导入失败"""
    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        super().__init__(
            message=f"Roster import failed: {message}",
            code="ROSTER_IMPORT_ERROR",
            details={"file_path": file_path},
            **kwargs
        )
