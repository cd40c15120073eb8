"""
成员字段验证器
"""
import re
from typing import Dict, Any, Optional

from ..exceptions import ValidationError, FailureReason


class MemberValidator:
    """成员字段验证器"""

    REQUIRED_FIELDS = ("name", "title", "department")
    OPTIONAL_FIELDS = ("avatar", "email")

    def __init__(self, max_length: int = 100):
        self._max_length = max_length
        self._email_pattern = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

    def validate_create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        验证新建成员的字段

        Args:
            fields: 字段字典，None表示缺失

        Returns:
            清理后的字段（必填字段去除首尾空白）

        Raises:
            ValidationError: 必填字段缺失或字段无效
        """
        validated = {}

        for field in self.REQUIRED_FIELDS:
            value = fields.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(
                    message=f"Missing required field: {field}",
                    field=field,
                    value=value,
                    reason=FailureReason.MISSING_FIELD
                )
            validated[field] = self._validate_string(field, value)

        for field in self.OPTIONAL_FIELDS:
            value = fields.get(field)
            if value is not None:
                validated[field] = self._validate_optional(field, value)

        return validated

    def validate_update(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        验证部分更新的字段，只检查出现的字段

        必填字段出现时不能为空串
        """
        validated = {}

        for field, value in changes.items():
            if field in self.REQUIRED_FIELDS:
                if not isinstance(value, str) or not value.strip():
                    raise ValidationError(
                        message=f"Field cannot be empty: {field}",
                        field=field,
                        value=value,
                        reason=FailureReason.MISSING_FIELD
                    )
                validated[field] = self._validate_string(field, value)
            elif field in self.OPTIONAL_FIELDS:
                validated[field] = self._validate_optional(field, value)
            else:
                raise ValidationError(
                    message=f"Unknown field: {field}",
                    field=field,
                    value=value
                )

        return validated

    def _validate_string(self, field: str, value: Any) -> str:
        """验证必填字符串"""
        if not isinstance(value, str):
            raise ValidationError(
                message=f"Field must be a string: {field}",
                field=field,
                value=value
            )

        value = value.strip()
        if len(value) > self._max_length:
            raise ValidationError(
                message=f"Field too long: {field} (max {self._max_length})",
                field=field,
                value=value
            )
        return value

    def _validate_optional(self, field: str, value: Any) -> str:
        """验证可选字段"""
        if not isinstance(value, str):
            raise ValidationError(
                message=f"Field must be a string: {field}",
                field=field,
                value=value
            )

        if field == "email" and value and not self.validate_email(value):
            raise ValidationError(
                message=f"Invalid email: {value}",
                field=field,
                value=value
            )
        return value

    def validate_email(self, email: Optional[str]) -> bool:
        """验证邮箱格式"""
        return bool(email) and bool(self._email_pattern.match(email))
