"""
节点模块 - 成员实体和创建
"""

from .entity import OrgNode
from .factory import NodeFactory
from .fields import MemberFields, MemberUpdate

__all__ = ['OrgNode', 'NodeFactory', 'MemberFields', 'MemberUpdate']
