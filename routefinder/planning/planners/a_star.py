# routefinder/planning/planners/a_star.py
import heapq
import itertools
import math
from typing import Dict, List, Optional, Tuple

from routefinder.types import Node
from routefinder.graph.graph import Graph
from routefinder.planning.interfaces import IPlannerObserver
from routefinder.planning.heuristics.base import Heuristic
from routefinder.planning.heuristics.euclidean import EuclideanHeuristic
from routefinder.planning.reconstruction import reconstruct_path
from .base import SearchResult, SearchStrategy, StopCondition, never_stop, resolve_observer, trivial_result


def a_star_search(graph: Graph,
                  start: Node,
                  target: Node,
                  observer: Optional[IPlannerObserver] = None,
                  should_stop: StopCondition = never_stop,
                  heuristic: Optional[Heuristic] = None) -> SearchResult:
    """
    A* (URGENT)：最小总边权，用启发式减少展开的节点。

    工作流程：
    1. g = 起点到当前点的实际代价，f = g + h，OpenSet 按 f 排序。
    2. 与 Dijkstra 相同的 lazy deletion：过期条目 pop 时丢弃。
    3. target 从 OpenSet 弹出即终止。

    默认启发式是欧氏距离。它是 consistent 的，所以节点第一次出堆时 g 已经最优，
    用 ClosedSet 跳过重复展开不会影响最优性。
    """
    observer = resolve_observer(observer)
    observer.set_map_info(graph)
    if start == target:
        return trivial_result(SearchStrategy.ASTAR, start)

    h_fn = heuristic if heuristic is not None else EuclideanHeuristic()
    counter = itertools.count()

    # G_Score: {node: g_val}，不在表里视为 +inf
    g_scores: Dict[Node, float] = {start: 0.0}
    # CameFrom: {child: parent}
    came_from: Dict[Node, Node] = {}
    closed_set = set()

    # OpenSet: (f_score, seq, node)，f 相同时按入堆顺序
    start_h = h_fn.estimate(start, target)
    open_set: List[Tuple[float, int, Node]] = [(start_h, next(counter), start)]
    observer.record_open_set_node(start, start_h, start_h)
    pushed = 1

    while open_set:
        if should_stop():
            observer.log("[A*] Search cancelled.", level='WARN', payload={'closed': len(closed_set)})
            return SearchResult(SearchStrategy.ASTAR, None, expanded=len(closed_set), pushed=pushed, cancelled=True)

        _, _, current = heapq.heappop(open_set)
        if current in closed_set:
            continue  # stale

        closed_set.add(current)
        observer.record_current_expansion(current)

        # A. 终止条件
        if current == target:
            path = reconstruct_path(came_from, start, target)
            return SearchResult(SearchStrategy.ASTAR, path, cost=g_scores[current],
                                expanded=len(closed_set), pushed=pushed)

        # B. 扩展邻居
        current_g = g_scores[current]
        for edge in graph.iter_edges(current):
            neighbor = edge.destination
            if neighbor in closed_set:
                continue

            tentative_g = current_g + edge.weight
            if tentative_g < g_scores.get(neighbor, math.inf):
                g_scores[neighbor] = tentative_g
                came_from[neighbor] = current

                h_val = h_fn.estimate(neighbor, target)
                f_val = tentative_g + h_val
                heapq.heappush(open_set, (f_val, next(counter), neighbor))
                pushed += 1

                observer.record_edge(current, neighbor)
                observer.record_open_set_node(neighbor, f_val, h_val)

    observer.log("[A*] Open set is empty, no path found.", level='INFO',
                 payload={'start': str(start), 'target': str(target), 'closed': len(closed_set)})
    return SearchResult(SearchStrategy.ASTAR, None, expanded=len(closed_set), pushed=pushed)
