# routefinder/graph/builder.py
import logging
import numpy as np

from routefinder.types import Node, SQRT2
from routefinder.map.grid_map import PassabilityGrid
from routefinder.exceptions import ConfigurationError
from .graph import Graph

logger = logging.getLogger(__name__)

# 8 个邻居的固定扫描顺序 (dx, dy, weight)
# 先上一行，再同一行，再下一行；邻接表的插入顺序由此决定，搜索的平局处理依赖它
NEIGHBOR_OFFSETS = [
    (-1, -1, SQRT2), (0, -1, 1.0), (1, -1, SQRT2),
    (-1, 0, 1.0),                   (1, 0, 1.0),
    (-1, 1, SQRT2),  (0, 1, 1.0),  (1, 1, SQRT2),
]


class GraphBuilder:
    """
    PassabilityGrid -> Graph

    工作流程：
    1. 每个可通行格子建一个 Node。
    2. 对每个可通行格子按 NEIGHBOR_OFFSETS 扫描 8 邻居，
       邻居在界内且可通行就加一条有向边 (直行 1.0，斜行 sqrt(2))。
    复杂度 O(W*H)，无递归。
    """

    def build(self, grid: PassabilityGrid) -> Graph:
        if not isinstance(grid, PassabilityGrid):
            grid = PassabilityGrid(grid)

        width, height = grid.width, grid.height
        graph = Graph(width, height)

        # 1. 节点 (行优先)
        cells = list(grid.passable_cells())
        for x, y in cells:
            graph._add_node(Node(x, y))

        # 2. 边
        # 四周补一圈 False，省去每次的越界判断；padded[y + 1][x + 1] 对应 (x, y)
        padded = np.pad(grid.data, 1, mode="constant", constant_values=False).tolist()
        for x, y in cells:
            current = graph.get_node(x, y)
            for dx, dy, weight in NEIGHBOR_OFFSETS:
                if padded[y + dy + 1][x + dx + 1]:
                    graph._add_edge(current, graph.get_node(x + dx, y + dy), weight)

        logger.debug("Built graph from %dx%d grid: %d nodes, %d edges",
                     width, height, graph.node_count, graph.edge_count)
        return graph


def build_graph(grid) -> Graph:
    """便捷入口：接受 PassabilityGrid 或 2-D 数组"""
    if grid is None:
        raise ConfigurationError("No passability grid given")
    return GraphBuilder().build(grid)
