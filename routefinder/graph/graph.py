# routefinder/graph/graph.py
from collections import deque
from typing import Iterator, List, Optional, Sequence, Set, Tuple, Union

from routefinder.types import Node, Edge, Path
from routefinder.planning.reconstruction import reconstruct_path

NodeLike = Union[Node, Tuple[int, int]]


class Graph:
    """
    栅格图：节点 = 可通行像素，边 = 8-连通邻接。

    存储方式：
    - _nodes: 长度 width*height 的扁平表，下标 = y * width + x，障碍处为 None
    - _adjacency: 同样下标，每个节点一个有序边列表 (插入顺序 = 邻居扫描顺序)
    这样 get_node 是 O(1) 的数组访问，不需要 "x,y" 字符串做 key 的哈希表。

    只由 GraphBuilder 构造；构造完成后视为只读，可在多个搜索之间共享。
    """

    def __init__(self, width: int, height: int):
        self._width = width
        self._height = height
        self._nodes: List[Optional[Node]] = [None] * (width * height)
        self._adjacency: List[Optional[List[Edge]]] = [None] * (width * height)
        self._node_count = 0
        self._edge_count = 0

    # --- 构造 (仅 GraphBuilder 使用) ---

    def _add_node(self, node: Node):
        idx = node.index(self._width)
        if self._nodes[idx] is None:
            self._node_count += 1
            self._adjacency[idx] = []
        self._nodes[idx] = node

    def _add_edge(self, source: Node, destination: Node, weight: float):
        self._adjacency[source.index(self._width)].append(Edge(source, destination, weight))
        self._edge_count += 1

    # --- 基本属性 ---

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def node_count(self) -> int:
        return self._node_count

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def is_empty(self) -> bool:
        return self._node_count == 0

    def __len__(self):
        return self._node_count

    def __contains__(self, item: NodeLike) -> bool:
        x, y = (item.x, item.y) if isinstance(item, Node) else item
        return self.node_exists(x, y)

    # --- 查询 ---

    def get_node(self, x: int, y: int) -> Optional[Node]:
        """坐标 -> 节点，越界或障碍返回 None"""
        if not (0 <= x < self._width and 0 <= y < self._height):
            return None
        return self._nodes[y * self._width + x]

    def node_exists(self, x: int, y: int) -> bool:
        return self.get_node(x, y) is not None

    def all_nodes(self) -> Iterator[Node]:
        """行优先顺序遍历所有节点"""
        return (n for n in self._nodes if n is not None)

    def get_edges(self, node: Node) -> Sequence[Edge]:
        """出边列表；没有邻居或不在图中时返回空序列，不抛异常"""
        if not (0 <= node.x < self._width and 0 <= node.y < self._height):
            return ()
        edges = self._adjacency[node.index(self._width)]
        return tuple(edges) if edges else ()

    def iter_edges(self, node: Node) -> Sequence[Edge]:
        """
        搜索热路径用：直接返回内部列表，不做拷贝。
        调用方不得修改返回值。
        """
        return self._adjacency[node.index(self._width)] or ()

    def get_neighbors(self, node: Node) -> Set[Node]:
        return {edge.destination for edge in self.get_edges(node)}

    def edge_weight(self, source: Node, destination: Node) -> Optional[float]:
        for edge in self.get_edges(source):
            if edge.destination == destination:
                return edge.weight
        return None

    def shortest_path_unweighted(self, start: Node, end: Node) -> Optional[Path]:
        """
        纯 BFS (只数跳数)，作为结构自检用，与策略选择无关。
        访问标记在入队时打，找不到返回 None。
        """
        if start is None or end is None or start not in self or end not in self:
            return None

        predecessors = {}
        visited = {start}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            if current == end:
                return reconstruct_path(predecessors, start, end)
            for edge in self.iter_edges(current):
                neighbor = edge.destination
                if neighbor not in visited:
                    visited.add(neighbor)
                    predecessors[neighbor] = current
                    queue.append(neighbor)
        return None

    def __repr__(self):
        return f"Graph({self._width}x{self._height}, nodes={self._node_count}, edges={self._edge_count})"
