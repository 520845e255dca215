# routefinder/planning/planners/base.py
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from routefinder.types import Node, Path
from routefinder.planning.interfaces import IPlannerObserver
from routefinder.visualization.observers import EfficientObserver

# 协作式取消：每次出队检查一次，返回 True 则放弃搜索
StopCondition = Callable[[], bool]


class SearchStrategy(Enum):
    BFS = "bfs"              # 最少边数，忽略权重
    DIJKSTRA = "dijkstra"    # 最小总权重
    ASTAR = "astar"          # 最小总权重 + 欧氏距离启发式


@dataclass
class SearchResult:
    """
    一次搜索的结果
    path 为 None 表示 "无路径" (正常结果，不是异常)
    """
    strategy: SearchStrategy
    path: Optional[Path]
    cost: float = math.inf   # 路径上边权之和，无路径时为 inf
    expanded: int = 0        # 出队并扩展的节点数 (settled / dequeued)
    pushed: int = 0          # 入队次数 (包括之后变成 stale 的条目)
    cancelled: bool = False

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def hops(self) -> int:
        return len(self.path) - 1 if self.path else -1

    def coordinates(self) -> List[tuple]:
        """给外部可视化用的 (x, y) 列表"""
        return [(n.x, n.y) for n in self.path] if self.path else []


def never_stop() -> bool:
    return False


def trivial_result(strategy: SearchStrategy, start: Node) -> SearchResult:
    """start == target：单节点路径，代价 0"""
    return SearchResult(strategy=strategy, path=[start], cost=0.0, expanded=0, pushed=0)


def resolve_observer(observer: Optional[IPlannerObserver]) -> IPlannerObserver:
    if observer is None:
        return EfficientObserver()
    return observer
