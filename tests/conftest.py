"""
pytest配置文件
用于设置测试环境和共享fixtures
"""
import sys
import os

import pytest

# 将src目录添加到Python路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from org_tree.core.ids import IncrementalIdAllocator
from org_tree.core.tree import TreeStore


ROOT_FIELDS = {"name": "Root", "title": "Chief Executive Officer", "department": "Executive Office"}


def member(name, title="Engineer", department="Technology", **extra):
    """构造成员字段"""
    fields = {"name": name, "title": title, "department": department}
    fields.update(extra)
    return fields


@pytest.fixture
def store():
    """只有根节点的成员树"""
    return TreeStore(ROOT_FIELDS, id_allocator=IncrementalIdAllocator())


@pytest.fixture
def scenario(store):
    """
    R
    ├── A
    │   └── C
    └── B
    """
    r = store.root_id
    a = store.create(r, member("A")).node.node_id
    b = store.create(r, member("B")).node.node_id
    c = store.create(a, member("C")).node.node_id
    return store, {"R": r, "A": a, "B": b, "C": c}
