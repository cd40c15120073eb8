"""
树模块 - 成员树仓库、定位和环路检查
"""

from .store import TreeStore, OperationResult
from .locator import find_node, find_parent, flatten, iter_preorder, depth_of, tree_depth
from .guard import is_descendant

__all__ = [
    'TreeStore',
    'OperationResult',
    'find_node',
    'find_parent',
    'flatten',
    'iter_preorder',
    'depth_of',
    'tree_depth',
    'is_descendant',
]
