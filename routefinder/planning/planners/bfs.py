# routefinder/planning/planners/bfs.py
from collections import deque
from typing import Dict, Optional

from routefinder.types import Node, path_cost
from routefinder.graph.graph import Graph
from routefinder.planning.interfaces import IPlannerObserver
from routefinder.planning.reconstruction import reconstruct_path
from .base import SearchResult, SearchStrategy, StopCondition, never_stop, resolve_observer, trivial_result


def bfs_search(graph: Graph,
               start: Node,
               target: Node,
               observer: Optional[IPlannerObserver] = None,
               should_stop: StopCondition = never_stop) -> SearchResult:
    """
    广度优先搜索 (ROUTINE)：最少边数，忽略边权。

    - FIFO 队列
    - 入队时打 visited 标记，同一节点不会重复入队
    - 每个新访问的节点只记录一次前驱 (先到先得 -> 邻居扫描顺序决定平局)
    - target 出队即停止
    """
    observer = resolve_observer(observer)
    observer.set_map_info(graph)
    if start == target:
        return trivial_result(SearchStrategy.BFS, start)

    predecessors: Dict[Node, Node] = {}
    visited = {start}
    queue = deque([start])
    expanded = 0
    pushed = 1
    observer.record_open_set_node(start)

    while queue:
        if should_stop():
            observer.log("[BFS] Search cancelled.", level='WARN', payload={'expanded': expanded})
            return SearchResult(SearchStrategy.BFS, None, expanded=expanded, pushed=pushed, cancelled=True)

        current = queue.popleft()
        expanded += 1
        observer.record_current_expansion(current)

        if current == target:
            path = reconstruct_path(predecessors, start, target)
            return SearchResult(SearchStrategy.BFS, path, cost=path_cost(path), expanded=expanded, pushed=pushed)

        for edge in graph.iter_edges(current):
            neighbor = edge.destination
            if neighbor in visited:
                continue
            visited.add(neighbor)
            predecessors[neighbor] = current
            queue.append(neighbor)
            pushed += 1
            observer.record_edge(current, neighbor)
            observer.record_open_set_node(neighbor)

    observer.log("[BFS] Queue is empty, no path found.", level='INFO', payload={'start': str(start), 'target': str(target)})
    return SearchResult(SearchStrategy.BFS, None, expanded=expanded, pushed=pushed)
