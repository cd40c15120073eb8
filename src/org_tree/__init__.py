"""
组织架构树 - 成员树维护与组织图布局
"""

__version__ = "1.0.0"

from .system import OrgChartSystem

__all__ = ['OrgChartSystem']
