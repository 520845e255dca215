from abc import ABC, abstractmethod
from routefinder.types import Node


class Heuristic(ABC):
    @abstractmethod
    def estimate(self, current: Node, goal: Node) -> float:
        """统一接口：只接受当前点和目标点"""
        pass
