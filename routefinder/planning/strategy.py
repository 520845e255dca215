# routefinder/planning/strategy.py
"""
路径搜索的统一入口。

三种算法是一个封闭的集合 (SearchStrategy 枚举)，由 search() 查表分发，
每种算法的 frontier / visited / 前驱表都是函数内部的局部状态，调用之间不共享。
"""
from typing import Callable, Dict, Optional, Tuple, Union

from routefinder.types import Node, Path, UrgencyTier
from routefinder.graph.graph import Graph
from routefinder.exceptions import ConfigurationError
from routefinder.planning.interfaces import IPlannerObserver
from routefinder.planning.planners.base import SearchResult, SearchStrategy, StopCondition, never_stop
from routefinder.planning.planners.bfs import bfs_search
from routefinder.planning.planners.dijkstra import dijkstra_search
from routefinder.planning.planners.a_star import a_star_search

Point = Union[Node, Tuple[int, int]]

_SEARCH_TABLE: Dict[SearchStrategy, Callable[..., SearchResult]] = {
    SearchStrategy.BFS: bfs_search,
    SearchStrategy.DIJKSTRA: dijkstra_search,
    SearchStrategy.ASTAR: a_star_search,
}

_TIER_TABLE: Dict[UrgencyTier, SearchStrategy] = {
    UrgencyTier.ROUTINE: SearchStrategy.BFS,
    UrgencyTier.STANDARD: SearchStrategy.DIJKSTRA,
    UrgencyTier.URGENT: SearchStrategy.ASTAR,
}


def strategy_for(tier, default: SearchStrategy = SearchStrategy.DIJKSTRA) -> SearchStrategy:
    """
    紧急等级 -> 搜索算法
    ROUTINE -> BFS, STANDARD -> DIJKSTRA, URGENT -> ASTAR，其他一律 default。
    tier 可以是 UrgencyTier，也可以是字符串 (大小写不敏感)。
    """
    if isinstance(tier, str):
        try:
            tier = UrgencyTier[tier.strip().upper()]
        except KeyError:
            return default
    return _TIER_TABLE.get(tier, default)


def parse_strategy(value: Union[SearchStrategy, str]) -> SearchStrategy:
    """'bfs' / 'Dijkstra' / 'A*' / SearchStrategy -> SearchStrategy"""
    if isinstance(value, SearchStrategy):
        return value
    key = str(value).strip().lower().replace("*", "star").replace("_", "").replace("-", "")
    for strategy in SearchStrategy:
        if strategy.value == key:
            return strategy
    raise ConfigurationError(f"Unknown search strategy: {value!r}")


def _resolve_node(graph: Graph, point: Point, role: str) -> Node:
    x, y = (point.x, point.y) if isinstance(point, Node) else point
    node = graph.get_node(x, y)
    if node is None:
        raise ConfigurationError(f"{role} ({x}, {y}) is not a traversable node of the graph")
    return node


def search(graph: Graph,
           start: Point,
           target: Point,
           strategy: Union[SearchStrategy, str] = SearchStrategy.DIJKSTRA,
           observer: Optional[IPlannerObserver] = None,
           should_stop: StopCondition = never_stop) -> SearchResult:
    """
    执行一次搜索，返回带统计信息的 SearchResult。

    搜索开始前的检查 (不满足抛 ConfigurationError)：
    - 图非空
    - start / target 都是图里的节点 (界内且可通行)
    目标不可达不是错误：返回 path=None 的结果。
    """
    if graph is None or graph.is_empty():
        raise ConfigurationError("Graph is empty, nothing to search")

    start_node = _resolve_node(graph, start, "Start")
    target_node = _resolve_node(graph, target, "Target")
    search_fn = _SEARCH_TABLE[parse_strategy(strategy)]
    return search_fn(graph, start_node, target_node, observer=observer, should_stop=should_stop)


def find_path(graph: Graph,
              start: Point,
              target: Point,
              strategy: Union[SearchStrategy, str] = SearchStrategy.DIJKSTRA,
              observer: Optional[IPlannerObserver] = None) -> Optional[Path]:
    """有序节点列表，不可达返回 None"""
    return search(graph, start, target, strategy, observer=observer).path
