# -*- coding: utf-8 -*-
"""
ID分配器实现 - 单调递增编号
"""
import threading
from typing import Set

from ...interfaces import IIdAllocator
from ...exceptions import ConfigError


class IncrementalIdAllocator(IIdAllocator):
    """
    增量ID分配器

    按前缀加递增计数分配ID，例如：
    m1, m2, m3, ...
    删除成员后其ID不会被重新分配
    """

    def __init__(self, prefix: str = "m", start: int = 1):
        """
        初始化ID分配器

        Args:
            prefix: ID前缀
            start: 起始编号
        """
        if not prefix:
            raise ConfigError("ID前缀不能为空", config_key="id_prefix")
        if start < 0:
            raise ConfigError(f"起始编号不能为负数: {start}", config_key="start")

        self._prefix = prefix
        self._next = start
        self._lock = threading.Lock()

        # 外部登记的ID（不符合前缀格式的）
        self._reserved: Set[str] = set()

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def next_number(self) -> int:
        """下一个待分配的编号"""
        return self._next

    def allocate(self) -> str:
        """分配下一个ID"""
        with self._lock:
            while True:
                node_id = f"{self._prefix}{self._next}"
                self._next += 1
                if node_id not in self._reserved:
                    return node_id

    def reserve(self, node_id: str) -> None:
        """登记外部ID，计数器跳过它"""
        with self._lock:
            number = self._parse(node_id)
            if number is not None:
                # 保证计数严格递增
                if number >= self._next:
                    self._next = number + 1
            else:
                self._reserved.add(node_id)

    def is_issued(self, node_id: str) -> bool:
        with self._lock:
            if node_id in self._reserved:
                return True
            number = self._parse(node_id)
            return number is not None and number < self._next

    def _parse(self, node_id: str):
        """解析本前缀下的编号，不匹配返回None"""
        if not isinstance(node_id, str) or not node_id.startswith(self._prefix):
            return None
        suffix = node_id[len(self._prefix):]
        if not suffix.isdigit():
            return None
        return int(suffix)

    def __repr__(self) -> str:
        return f"IncrementalIdAllocator(prefix={self._prefix!r}, next={self._next})"
