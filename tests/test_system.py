"""
测试系统接口
"""
import threading

import pytest

from org_tree import OrgChartSystem


@pytest.fixture
def system():
    return OrgChartSystem({"log_level": "WARNING", "id_prefix": "u"})


def _create(system, name, parent_id, **extra):
    payload = {"name": name, "title": "Engineer", "department": "Technology", "parentId": parent_id}
    payload.update(extra)
    return system.create_member(payload)


def test_system_creation(system):
    """测试系统创建"""
    info = system.get_system_info()

    assert info["system_name"] == "Org Chart"
    assert info["member_count"] == 1
    assert info["root_id"] == "u1"
    print("✓ 系统创建成功")


def test_create_member_payload(system):
    """测试新建成员返回体"""
    result = _create(system, "Alice", system.store.root_id, email="alice@example.com")

    assert result["success"] is True
    assert result["member"]["id"] == "u2"
    assert result["member"]["parentId"] == "u1"
    assert result["member"]["avatar"] == "👤"
    assert result["member"]["children"] == []


def test_create_member_failures(system):
    """测试新建失败返回体"""
    missing_parent = _create(system, "Alice", "u99")
    assert missing_parent == {
        "success": False,
        "error": "Parent member not found: u99",
        "code": "NOT_FOUND",
        "reason": "ParentNotFound",
    }

    no_parent = _create(system, "Alice", None)
    assert no_parent["success"] is False
    assert no_parent["code"] == "VALIDATION_ERROR"
    assert no_parent["reason"] == "MissingField"

    missing_name = system.create_member({"title": "T", "department": "D", "parentId": "u1"})
    assert missing_name["success"] is False
    assert missing_name["code"] == "VALIDATION_ERROR"
    assert missing_name["reason"] == "MissingField"


def test_update_member(system):
    """测试更新成员"""
    member_id = _create(system, "Alice", "u1")["member"]["id"]

    result = system.update_member(member_id, {"title": "CTO"})
    assert result["success"] is True
    assert result["member"]["title"] == "CTO"
    assert result["member"]["name"] == "Alice"

    assert system.update_member(member_id, {"parentId": "u1"})["code"] == "VALIDATION_ERROR"
    assert system.update_member(member_id, {"nickname": "Al"})["code"] == "VALIDATION_ERROR"
    assert system.update_member("u99", {"title": "X"})["code"] == "NOT_FOUND"


def test_delete_member(system):
    a = _create(system, "A", "u1")["member"]["id"]
    _create(system, "C", a)

    assert system.delete_member("u1")["reason"] == "IsRoot"
    assert system.delete_member(a)["reason"] == "HasChildren"
    assert system.delete_member("u99")["reason"] == "NotFound"


def test_move_member(system):
    """测试移动成员"""
    a = _create(system, "A", "u1")["member"]["id"]
    b = _create(system, "B", "u1")["member"]["id"]
    c = _create(system, "C", a)["member"]["id"]

    result = system.move_member(c, {"newParentId": b})
    assert result["success"] is True
    assert result["member"]["parentId"] == b

    cycle = system.move_member(b, {"newParentId": c})
    assert cycle["code"] == "INTEGRITY_ERROR"
    assert cycle["reason"] == "DescendantCycle"

    assert system.move_member(c, {})["code"] == "VALIDATION_ERROR"


def test_get_tree_and_layout(system):
    """测试树读取和布局"""
    a = _create(system, "A", "u1")["member"]["id"]
    _create(system, "B", "u1")
    _create(system, "C", a)

    tree = system.get_tree()
    assert tree["success"] is True
    assert tree["stats"]["total"] == 4
    assert [child["name"] for child in tree["tree"]["children"]] == ["A", "B"]

    layout = system.get_layout()
    assert layout["success"] is True
    assert len(layout["nodes"]) == 4
    assert len(layout["edges"]) == 3
    assert layout["nodes"][0] == {"id": "u1", "x": 0, "y": 0}


def test_get_and_list_members(system):
    a = _create(system, "A", "u1")["member"]["id"]

    assert system.get_member(a)["member"]["name"] == "A"
    assert system.get_member("u99")["reason"] == "NotFound"

    listing = system.list_members()
    assert listing["total"] == 2
    assert [m["id"] for m in listing["members"]] == ["u1", a]
    assert listing["members"][0]["children"] == [a]


def test_custom_layout_settings():
    system = OrgChartSystem({"log_level": "WARNING", "node_width": 100, "horizontal_spacing": 20})
    root = system.store.root_id
    first = _create(system, "A", root)["member"]["id"]
    second = _create(system, "B", root)["member"]["id"]

    layout = system.compute_layout()
    assert layout.position_of(second).x - layout.position_of(first).x == 120


def test_non_string_ids_are_rejected(system):
    """测试 JSON 中非字符串的ID返回校验失败，而不是抛异常"""
    a = _create(system, "A", "u1")["member"]["id"]

    list_parent = _create(system, "B", ["u1"])
    assert list_parent["success"] is False
    assert list_parent["code"] == "VALIDATION_ERROR"
    assert list_parent["reason"] == "InvalidField"

    dict_parent = _create(system, "B", {"id": "u1"})
    assert dict_parent["code"] == "VALIDATION_ERROR"

    list_target = system.move_member(a, {"newParentId": ["u1"]})
    assert list_target["code"] == "VALIDATION_ERROR"
    assert list_target["reason"] == "InvalidField"

    assert system.move_member(["x"], {"newParentId": "u1"})["code"] == "VALIDATION_ERROR"
    assert system.update_member(["x"], {"title": "CTO"})["code"] == "VALIDATION_ERROR"
    assert system.delete_member({"a": 1})["code"] == "VALIDATION_ERROR"
    assert system.get_member(["x"])["reason"] == "NotFound"

    # 树保持不变
    assert system.store.count() == 2
    assert system.get_member(a)["member"]["parentId"] == "u1"
    print("✓ 非字符串ID被拒绝")


def _count_nodes(tree):
    count = 0
    stack = [tree]
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node["children"])
    return count


def test_get_tree_payload_is_consistent_under_writes(system):
    """测试并发写入时 get_tree 的树和统计来自同一时刻"""
    stop = threading.Event()

    def writer():
        while not stop.is_set():
            created = _create(system, "Temp", "u1")
            system.delete_member(created["member"]["id"])

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        for _ in range(2000):
            payload = system.get_tree()
            assert _count_nodes(payload["tree"]) == payload["stats"]["total"]
    finally:
        stop.set()
        thread.join()

    assert system.get_tree()["stats"]["total"] == 1
