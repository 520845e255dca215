# routefinder/types.py
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

SQRT2 = math.sqrt(2.0)


@dataclass(frozen=True)
class Node:
    """
    图节点 = 一个可通行像素 (x, y)
    结构相等：坐标相同即为同一节点，可直接作为 dict/set 的 key
    """
    x: int
    y: int

    def index(self, width: int) -> int:
        """行优先的扁平索引，与 PassabilityGrid.flat_index 一致"""
        return self.y * width + self.x

    def __str__(self):
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Edge:
    """有向边，权重只可能是 1.0 (直行) 或 sqrt(2) (斜行)"""
    source: Node
    destination: Node
    weight: float

    @property
    def is_diagonal(self) -> bool:
        return self.source.x != self.destination.x and self.source.y != self.destination.y

    def __str__(self):
        return f"{self.source} -> {self.destination} ({self.weight})"


# 有序、非空的节点序列：path[0] = start, path[-1] = target
Path = List[Node]


def path_cost(path: Optional[Sequence[Node]]) -> float:
    """
    按几何步长累加路径代价 (直行 1.0，斜行 sqrt(2))。
    相邻节点必须是 8-连通邻居，否则抛 ValueError。
    """
    if not path:
        return math.inf
    total = 0.0
    for a, b in zip(path, path[1:]):
        dx, dy = abs(a.x - b.x), abs(a.y - b.y)
        if dx > 1 or dy > 1 or (dx == 0 and dy == 0):
            raise ValueError(f"{a} and {b} are not adjacent")
        total += SQRT2 if dx and dy else 1.0
    return total


class UrgencyTier(Enum):
    """紧急程度分级 (外部分类结果)"""
    URGENT = "urgent"      # 危急 -> A*
    STANDARD = "standard"  # 普通 -> Dijkstra
    ROUTINE = "routine"    # 非紧急 -> BFS

    @property
    def algorithm_name(self) -> str:
        return _ALGORITHM_NAMES.get(self, "Unknown Algorithm")


_ALGORITHM_NAMES = {
    UrgencyTier.URGENT: "A* Algorithm",
    UrgencyTier.STANDARD: "Dijkstra's Algorithm",
    UrgencyTier.ROUTINE: "BFS Algorithm",
}


@dataclass
class Emergency:
    """
    地图上的一个紧急事件
    tier 决定使用哪种搜索算法 (见 planning.strategy)
    """
    x: int
    y: int
    tier: UrgencyTier
    description: str = ""
    resolved: bool = False

    @property
    def location(self):
        return (self.x, self.y)

    @property
    def algorithm_name(self) -> str:
        return self.tier.algorithm_name

    def __str__(self):
        status = "RESOLVED" if self.resolved else "ACTIVE"
        return f"{self.tier.name} Emergency at ({self.x}, {self.y}): {self.description} [{status}]"
