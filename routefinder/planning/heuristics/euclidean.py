# routefinder/planning/heuristics/euclidean.py
import math
from routefinder.types import Node
from .base import Heuristic


class EuclideanHeuristic(Heuristic):
    """
    欧氏距离启发式 (URGENT 路线的默认启发式)
    8-连通栅格上直行 1.0、斜行 sqrt(2)，任何路径的长度都 >= 直线距离，
    所以 Admissible 且 Consistent，A* 结果与 Dijkstra 等价。
    """
    def estimate(self, current: Node, goal: Node) -> float:
        return math.hypot(current.x - goal.x, current.y - goal.y)
