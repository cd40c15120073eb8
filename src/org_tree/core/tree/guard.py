"""
环路检查
"""

from ..node.entity import OrgNode


def is_descendant(candidate_ancestor: OrgNode, target_id: str) -> bool:
    """
    判断 target_id 是否为 candidate_ancestor 自身或位于其子树中

    用于 move：若新父节点位于被移动节点的子树内，移动会形成环

    Args:
        candidate_ancestor: 可能的祖先节点
        target_id: 待检查的节点ID

    Returns:
        True 表示 target 在 candidate_ancestor 的子树内（含自身）
    """
    stack = [candidate_ancestor]
    while stack:
        node = stack.pop()
        if node.node_id == target_id:
            return True
        stack.extend(node.children)
    return False
