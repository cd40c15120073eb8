"""
测试布局引擎
"""
import pytest

from org_tree.core.node import OrgNode
from org_tree.exceptions import ConfigError
from org_tree.layout import LayoutEngine, LayoutEdge

from conftest import member


def _node(node_id):
    return OrgNode(node_id, node_id.upper(), "T", "D")


def _tree(shape):
    """shape: {parent: [children]}，根为 'r'"""
    nodes = {}

    def get(node_id):
        if node_id not in nodes:
            nodes[node_id] = _node(node_id)
        return nodes[node_id]

    for parent, children in shape.items():
        for child in children:
            get(parent).add_child(get(child))
    return get("r")


def _positions(result):
    return {n.id: (n.x, n.y) for n in result.nodes}


def test_single_root():
    """测试只有根节点"""
    result = LayoutEngine().layout(_node("r"))

    assert _positions(result) == {"r": (0, 0)}
    assert result.edges == []
    assert result.nodes[0].is_root


def test_two_equal_children_spacing():
    """两个等宽子节点相距 node_width + horizontal_spacing"""
    engine = LayoutEngine(node_width=180, node_height=140, horizontal_spacing=40, vertical_spacing=80)
    result = engine.layout(_tree({"r": ["a", "b"]}))
    pos = _positions(result)

    assert pos["b"][0] == pos["a"][0] + 180 + 40
    assert pos["a"] == (-110, 220)
    assert pos["b"] == (110, 220)
    print("✓ 子节点间距测试通过")


def test_subtree_widths():
    """测试子树宽度"""
    engine = LayoutEngine()
    root = _tree({"r": ["a", "b"], "a": ["c", "d"]})
    widths = engine.subtree_widths(root)

    assert widths["c"] == 180
    assert widths["a"] == 400
    assert widths["b"] == 180
    assert widths["r"] == 620

    # 单个子节点时不小于节点宽度
    assert engine.subtree_widths(_tree({"r": ["a"]}))["r"] == 180


def test_nested_positions():
    """测试多层精确坐标"""
    result = LayoutEngine().layout(_tree({"r": ["a", "b"], "a": ["c", "d"]}))
    pos = _positions(result)

    assert pos["r"] == (0, 0)
    assert pos["a"] == (-110, 220)
    assert pos["b"] == (220, 220)
    assert pos["c"] == (-220, 440)
    assert pos["d"] == (0, 440)


def test_order_and_edges():
    """节点前序输出，连线在放置子节点时生成"""
    result = LayoutEngine().layout(_tree({"r": ["a", "b"], "a": ["c", "d"]}))

    assert [n.id for n in result.nodes] == ["r", "a", "c", "d", "b"]
    assert [(e.source, e.target) for e in result.edges] == [
        ("r", "a"), ("a", "c"), ("a", "d"), ("r", "b")
    ]
    assert [n.depth for n in result.nodes] == [0, 1, 2, 2, 1]
    assert LayoutEdge("r", "a").id == "r-a"


def test_child_order_determines_placement():
    """子节点只按 children 顺序排列"""
    left = LayoutEngine().layout(_tree({"r": ["z", "a"]}))
    pos = _positions(left)
    assert pos["z"][0] < pos["a"][0]


def test_layout_is_deterministic():
    """相同的树多次布局结果完全相同"""
    engine = LayoutEngine()
    shape = {"r": ["a", "b", "c"], "a": ["d"], "c": ["e", "f", "g"], "f": ["h", "i"]}

    first = engine.layout(_tree(shape)).to_dict()
    second = engine.layout(_tree(shape)).to_dict()
    assert first == second
    assert repr(first) == repr(second)


def test_layout_does_not_mutate_tree():
    root = _tree({"r": ["a", "b"], "a": ["c"]})
    before = root.to_dict()
    LayoutEngine().layout(root)
    assert root.to_dict() == before


def test_no_overlap_between_siblings():
    """同层节点不重叠"""
    engine = LayoutEngine()
    shape = {"r": ["a", "b", "c"], "a": ["d", "e", "f"], "c": ["g", "h"], "e": ["i", "j", "k"]}
    result = engine.layout(_tree(shape))

    by_row = {}
    for node in result.nodes:
        by_row.setdefault(node.y, []).append(node.x)
    for xs in by_row.values():
        xs.sort()
        for left, right in zip(xs, xs[1:]):
            assert right - left >= engine.node_width + engine.horizontal_spacing


def test_deep_chain():
    """深链不会触发递归限制"""
    root = _node("n0")
    current = root
    for i in range(1, 3000):
        child = _node(f"n{i}")
        current.add_child(child)
        current = child

    result = LayoutEngine().layout(root)
    assert len(result.nodes) == 3000
    assert len(result.edges) == 2999
    assert all(n.x == 0 for n in result.nodes)
    assert result.nodes[-1].y == 2999 * (140 + 80)


def test_to_dict_shape():
    result = LayoutEngine().layout(_tree({"r": ["a"]}))
    data = result.to_dict()

    assert data["nodes"][0] == {"id": "r", "x": 0, "y": 0}
    assert data["edges"] == [{"id": "r-a", "from": "r", "to": "a"}]


def test_drop_target_and_bounds():
    """测试拖拽落点检测和包围盒"""
    result = LayoutEngine().layout(_tree({"r": ["a", "b"]}))

    # 把 a 拖到 b 的位置附近
    assert result.find_drop_target("a", 120, 230) == "b"
    # 自身不作为落点
    assert result.find_drop_target("a", -110, 220) is None
    assert result.find_drop_target("a", 5000, 5000) is None
    assert result.position_of("b").x == 110
    assert result.position_of("zzz") is None

    assert result.bounds() == (-110, 0, 290, 360)


def test_layout_from_store_snapshot(scenario):
    """布局只读取仓库快照"""
    store, ids = scenario
    store.create(ids["B"], member("D"))

    result = LayoutEngine().layout(store.snapshot())
    assert [n.id for n in result.nodes] == [n.node_id for n in store.list()]
    assert len(result.edges) == store.count() - 1


def test_invalid_engine_config():
    with pytest.raises(ConfigError):
        LayoutEngine(node_width=0)
    with pytest.raises(ConfigError):
        LayoutEngine(horizontal_spacing=-1)
