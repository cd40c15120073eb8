"""
ID分配器接口
"""
from abc import ABC, abstractmethod


class IIdAllocator(ABC):
    """ID分配器接口 - 为成员分配进程内唯一的ID"""

    @abstractmethod
    def allocate(self) -> str:
        """
        分配一个新的ID

        Returns:
            从未分配过的ID，如 "m1"
        """
        pass

    @abstractmethod
    def reserve(self, node_id: str) -> None:
        """
        登记外部提供的ID，之后不会再分配该ID

        Args:
            node_id: 已被占用的ID
        """
        pass

    @abstractmethod
    def is_issued(self, node_id: str) -> bool:
        """检查ID是否已分配或登记（不会再被分配）"""
        pass
