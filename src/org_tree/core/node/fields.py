"""
成员字段结构
新建使用 MemberFields，部分更新使用 MemberUpdate（每个字段独立地存在或缺失）
"""
from dataclasses import dataclass, fields as dataclass_fields
from typing import Dict, Any, Optional

from ...exceptions import ValidationError


DISPLAY_FIELDS = ("name", "title", "department", "avatar", "email")


@dataclass(frozen=True)
class MemberFields:
    """新建成员的字段；name/title/department 必填，由验证器检查"""
    name: Optional[str]
    title: Optional[str]
    department: Optional[str]
    avatar: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {field.name: getattr(self, field.name) for field in dataclass_fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MemberFields':
        """从请求体创建；缺失的必填字段留给验证器报告，其他键忽略"""
        return cls(**{key: data.get(key) for key in DISPLAY_FIELDS})


@dataclass(frozen=True)
class MemberUpdate:
    """部分更新；None 表示该字段不更新"""
    name: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    avatar: Optional[str] = None
    email: Optional[str] = None

    def present(self) -> Dict[str, Any]:
        """出现的字段"""
        return {
            field.name: getattr(self, field.name)
            for field in dataclass_fields(self)
            if getattr(self, field.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.present()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MemberUpdate':
        """
        从请求体创建部分更新

        Raises:
            ValidationError: 出现未知字段，或试图通过更新修改ID/父节点
        """
        for key in data:
            if key in ("id", "parentId", "children"):
                raise ValidationError(
                    message=f"Field cannot be updated: {key}",
                    field=key,
                    value=data[key]
                )
            if key not in DISPLAY_FIELDS:
                raise ValidationError(
                    message=f"Unknown field: {key}",
                    field=key,
                    value=data[key]
                )
        return cls(**data)
