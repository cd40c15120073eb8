"""
核心模块包
包含成员实体、ID分配、成员树仓库
"""

# 导入ID模块
from .ids import IncrementalIdAllocator

# 导入节点模块
from .node import OrgNode, NodeFactory, MemberFields, MemberUpdate

# 导入树模块
from .tree import TreeStore, OperationResult

__all__ = [
    # ID模块
    'IncrementalIdAllocator',

    # 节点模块
    'OrgNode',
    'NodeFactory',
    'MemberFields',
    'MemberUpdate',

    # 树模块
    'TreeStore',
    'OperationResult',
]
