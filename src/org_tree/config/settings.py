"""
系统配置设置
"""
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict

from ..exceptions import ConfigError


@dataclass
class SystemSettings:
    """
    系统配置类
    使用dataclass确保配置的类型安全
    """

    # 系统基本配置
    system_name: str = "Org Chart"
    version: str = "1.0.0"

    # 日志配置
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ID配置
    id_prefix: str = "m"

    # 布局配置（与前端组织图保持一致）
    node_width: int = 180
    node_height: int = 140
    horizontal_spacing: int = 40
    vertical_spacing: int = 80

    # 成员默认值
    default_avatar: str = "👤"
    default_email: str = ""

    # 根节点配置
    root_name: str = "CEO"
    root_title: str = "Chief Executive Officer"
    root_department: str = "Executive Office"
    root_avatar: str = "👨‍💼"
    root_email: str = ""

    def __post_init__(self):
        """初始化后处理，验证配置"""
        self._validate_settings()

    def _validate_settings(self):
        """验证配置值"""
        # 验证日志级别
        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ConfigError(
                message=f"无效的日志级别: {self.log_level}",
                config_key="log_level"
            )
        self.log_level = self.log_level.upper()

        if not self.id_prefix:
            raise ConfigError(message="ID前缀不能为空", config_key="id_prefix")

        # 验证布局尺寸
        for key in ("node_width", "node_height"):
            if getattr(self, key) <= 0:
                raise ConfigError(
                    message=f"{key}必须大于0: {getattr(self, key)}",
                    config_key=key
                )
        for key in ("horizontal_spacing", "vertical_spacing"):
            if getattr(self, key) < 0:
                raise ConfigError(
                    message=f"{key}不能为负数: {getattr(self, key)}",
                    config_key=key
                )

        # 根节点必填字段
        for key in ("root_name", "root_title", "root_department"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(message=f"根节点字段不能为空: {key}", config_key=key)

    def root_fields(self) -> Dict[str, Any]:
        """根节点的成员字段"""
        return {
            "name": self.root_name,
            "title": self.root_title,
            "department": self.root_department,
            "avatar": self.root_avatar,
            "email": self.root_email,
        }

    def layout_options(self) -> Dict[str, int]:
        """布局引擎参数"""
        return {
            "node_width": self.node_width,
            "node_height": self.node_height,
            "horizontal_spacing": self.horizontal_spacing,
            "vertical_spacing": self.vertical_spacing,
        }

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'SystemSettings':
        """从字典创建配置"""
        # 过滤无效的配置键
        valid_keys = {field.name for field in cls.__dataclass_fields__.values()}
        filtered_config = {k: v for k, v in config_dict.items() if k in valid_keys}

        return cls(**filtered_config)
