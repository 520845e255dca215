# routefinder/planning/planners/dijkstra.py
import heapq
import itertools
import math
from typing import Dict, List, Optional, Tuple

from routefinder.types import Node
from routefinder.graph.graph import Graph
from routefinder.planning.interfaces import IPlannerObserver
from routefinder.planning.reconstruction import reconstruct_path
from .base import SearchResult, SearchStrategy, StopCondition, never_stop, resolve_observer, trivial_result


def dijkstra_search(graph: Graph,
                    start: Node,
                    target: Node,
                    observer: Optional[IPlannerObserver] = None,
                    should_stop: StopCondition = never_stop) -> SearchResult:
    """
    Dijkstra (STANDARD)：最小总边权，要求边权非负 (构造保证)。

    heapq 没有 decrease-key，所以用 lazy deletion：
    松弛成功就重新 push 一条新条目，旧条目留在堆里，pop 出来时再丢掉。
    堆条目是 (distance, seq, node)，seq 是递增的入堆序号，
    距离相同时先入堆的先出，保证结果可复现。
    """
    observer = resolve_observer(observer)
    observer.set_map_info(graph)
    if start == target:
        return trivial_result(SearchStrategy.DIJKSTRA, start)

    counter = itertools.count()
    # 未出现在 distance 里的节点距离视为 +inf
    distance: Dict[Node, float] = {start: 0.0}
    predecessors: Dict[Node, Node] = {}
    settled = set()

    open_set: List[Tuple[float, int, Node]] = [(0.0, next(counter), start)]
    observer.record_open_set_node(start, 0.0, 0.0)
    pushed = 1

    while open_set:
        if should_stop():
            observer.log("[Dijkstra] Search cancelled.", level='WARN', payload={'settled': len(settled)})
            return SearchResult(SearchStrategy.DIJKSTRA, None, expanded=len(settled), pushed=pushed, cancelled=True)

        current_dist, _, current = heapq.heappop(open_set)

        # stale 条目：已经 settle 过，或者之后找到了更短的距离
        if current in settled or current_dist > distance[current]:
            continue

        settled.add(current)
        observer.record_current_expansion(current)

        # A. 终止条件：target 出堆后距离不可能再变小
        if current == target:
            path = reconstruct_path(predecessors, start, target)
            return SearchResult(SearchStrategy.DIJKSTRA, path, cost=current_dist,
                                expanded=len(settled), pushed=pushed)

        # B. 松弛出边
        for edge in graph.iter_edges(current):
            neighbor = edge.destination
            if neighbor in settled:
                continue
            new_dist = current_dist + edge.weight
            if new_dist < distance.get(neighbor, math.inf):
                distance[neighbor] = new_dist
                predecessors[neighbor] = current
                heapq.heappush(open_set, (new_dist, next(counter), neighbor))
                pushed += 1
                observer.record_edge(current, neighbor)
                observer.record_open_set_node(neighbor, new_dist, 0.0)

    observer.log("[Dijkstra] Open set is empty, no path found.", level='INFO',
                 payload={'start': str(start), 'target': str(target), 'settled': len(settled)})
    return SearchResult(SearchStrategy.DIJKSTRA, None, expanded=len(settled), pushed=pushed)
