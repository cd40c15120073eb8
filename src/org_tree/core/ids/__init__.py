"""
ID模块 - 成员ID分配
"""

from .allocator import IncrementalIdAllocator

__all__ = ['IncrementalIdAllocator']
