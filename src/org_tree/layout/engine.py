"""
组织图布局引擎
把成员树转换为带坐标的节点列表和连线列表，供外部渲染使用

两遍算法：
1. 自底向上计算每棵子树占用的宽度
2. 自顶向下分配坐标，子节点按 children 顺序从左到右排列
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.node.entity import OrgNode
from ..exceptions import ConfigError


@dataclass(frozen=True)
class PositionedNode:
    """带坐标的节点，(x, y) 为节点框左上角"""
    id: str
    x: float
    y: float
    depth: int = 0
    is_root: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {'id': self.id, 'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class LayoutEdge:
    """父节点到子节点的连线"""
    source: str
    target: str

    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}"

    def to_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'from': self.source, 'to': self.target}


@dataclass
class LayoutResult:
    """布局结果"""
    nodes: List[PositionedNode] = field(default_factory=list)
    edges: List[LayoutEdge] = field(default_factory=list)
    node_width: float = 180
    node_height: float = 140

    def position_of(self, node_id: str) -> Optional[PositionedNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def bounds(self) -> Tuple[float, float, float, float]:
        """整体包围盒 (min_x, min_y, max_x, max_y)"""
        if not self.nodes:
            return 0, 0, 0, 0
        min_x = min(n.x for n in self.nodes)
        min_y = min(n.y for n in self.nodes)
        max_x = max(n.x for n in self.nodes) + self.node_width
        max_y = max(n.y for n in self.nodes) + self.node_height
        return min_x, min_y, max_x, max_y

    def find_drop_target(self, dragged_id: str, x: float, y: float) -> Optional[str]:
        """
        拖拽落点检测

        被拖拽节点左上角位于 (x, y) 时，返回其中心点所在的其他节点ID

        Args:
            dragged_id: 被拖拽的节点ID（自身不参与检测）
            x: 拖拽后节点框左上角横坐标
            y: 拖拽后节点框左上角纵坐标

        Returns:
            落点节点ID，没有则返回None
        """
        center_x = x + self.node_width / 2
        center_y = y + self.node_height / 2

        for node in self.nodes:
            if node.id == dragged_id:
                continue
            if (node.x <= center_x <= node.x + self.node_width and
                    node.y <= center_y <= node.y + self.node_height):
                return node.id
        return None

    def to_dict(self) -> Dict[str, list]:
        return {
            'nodes': [n.to_dict() for n in self.nodes],
            'edges': [e.to_dict() for e in self.edges],
        }


class LayoutEngine:
    """树形布局引擎（纯函数式，不修改输入树）"""

    def __init__(
        self,
        node_width: float = 180,
        node_height: float = 140,
        horizontal_spacing: float = 40,
        vertical_spacing: float = 80
    ):
        """
        初始化布局引擎

        Args:
            node_width: 节点宽度
            node_height: 节点高度
            horizontal_spacing: 兄弟子树之间的水平间距
            vertical_spacing: 上下层之间的垂直间距
        """
        if node_width <= 0 or node_height <= 0:
            raise ConfigError(f"节点尺寸必须大于0: {node_width}x{node_height}", config_key="node_width")
        if horizontal_spacing < 0 or vertical_spacing < 0:
            raise ConfigError("间距不能为负数", config_key="horizontal_spacing")

        self.node_width = node_width
        self.node_height = node_height
        self.horizontal_spacing = horizontal_spacing
        self.vertical_spacing = vertical_spacing

    def subtree_widths(self, root: OrgNode) -> Dict[str, float]:
        """
        计算每个节点的子树宽度

        叶子宽度为 node_width；
        内部节点为 max(node_width, 子树宽度之和 + (子节点数-1) * 水平间距)
        """
        widths: Dict[str, float] = {}

        # 后序遍历：第二次出栈时子节点已全部算完
        stack: List[Tuple[OrgNode, bool]] = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if not node.children:
                widths[node.node_id] = self.node_width
                continue
            if not expanded:
                stack.append((node, True))
                for child in node.children:
                    stack.append((child, False))
                continue
            widths[node.node_id] = max(self.node_width, self._children_width(node, widths))

        return widths

    def _children_width(self, node: OrgNode, widths: Dict[str, float]) -> float:
        total = sum(widths[child.node_id] for child in node.children)
        return total + (len(node.children) - 1) * self.horizontal_spacing

    def layout(self, root: OrgNode) -> LayoutResult:
        """
        计算布局

        Args:
            root: 树快照的根节点

        Returns:
            LayoutResult，节点按前序排列，连线在放置子节点时生成
        """
        widths = self.subtree_widths(root)
        result = LayoutResult(node_width=self.node_width, node_height=self.node_height)

        # (节点, x, y, 深度, 父节点ID)
        stack: List[Tuple[OrgNode, float, float, int, Optional[str]]] = [(root, 0, 0, 0, None)]
        while stack:
            node, x, y, depth, parent_id = stack.pop()

            if parent_id is not None:
                result.edges.append(LayoutEdge(source=parent_id, target=node.node_id))
            result.nodes.append(PositionedNode(
                id=node.node_id, x=x, y=y, depth=depth, is_root=parent_id is None
            ))

            if not node.children:
                continue

            total_width = self._children_width(node, widths)
            current_x = x + self.node_width / 2 - total_width / 2
            child_y = y + self.node_height + self.vertical_spacing

            placements = []
            for child in node.children:
                child_width = widths[child.node_id]
                child_x = current_x + child_width / 2 - self.node_width / 2
                placements.append((child, child_x, child_y, depth + 1, node.node_id))
                current_x += child_width + self.horizontal_spacing

            # 逆序压栈，保持前序输出顺序
            stack.extend(reversed(placements))

        return result
