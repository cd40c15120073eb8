"""
配置模块
"""

from .settings import SystemSettings
from .validator import MemberValidator

__all__ = ['SystemSettings', 'MemberValidator']
