"""
布局模块
"""

from .engine import LayoutEngine, LayoutResult, PositionedNode, LayoutEdge

__all__ = ['LayoutEngine', 'LayoutResult', 'PositionedNode', 'LayoutEdge']
