"""
接口定义包
"""

from .iallocator import IIdAllocator

__all__ = ['IIdAllocator']
