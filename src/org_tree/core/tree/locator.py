"""
节点定位工具
只读遍历：按ID查找、查找父节点、前序展开
全部使用显式栈，树的深度不受递归限制
"""

from typing import Optional, List, Iterator, Tuple

from ..node.entity import OrgNode


def iter_preorder(root: Optional[OrgNode]) -> Iterator[Tuple[OrgNode, int]]:
    """前序遍历，产出 (节点, 深度)，子节点按 children 顺序"""
    if root is None:
        return

    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        # 逆序压栈，保证先访问第一个子节点
        for child in reversed(node.children):
            stack.append((child, depth + 1))


def find_node(root: Optional[OrgNode], node_id: str) -> Optional[OrgNode]:
    """按ID查找节点"""
    for node, _ in iter_preorder(root):
        if node.node_id == node_id:
            return node
    return None


def find_parent(root: Optional[OrgNode], node_id: str) -> Optional[OrgNode]:
    """查找 children 中包含该ID的节点；根节点或不存在时返回None"""
    for node, _ in iter_preorder(root):
        for child in node.children:
            if child.node_id == node_id:
                return node
    return None


def flatten(root: Optional[OrgNode]) -> List[OrgNode]:
    """前序展开：根在前，然后按 children 顺序展开每棵子树"""
    return [node for node, _ in iter_preorder(root)]


def depth_of(root: Optional[OrgNode], node_id: str) -> int:
    """节点深度，根为0；不存在返回-1"""
    for node, depth in iter_preorder(root):
        if node.node_id == node_id:
            return depth
    return -1


def tree_depth(root: Optional[OrgNode]) -> int:
    """树的最大深度，只有根时为0，空树为0"""
    max_depth = 0
    for _, depth in iter_preorder(root):
        max_depth = max(max_depth, depth)
    return max_depth
