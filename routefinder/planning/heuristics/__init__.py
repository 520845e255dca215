# routefinder/planning/heuristics/__init__.py

from .base import Heuristic
from .euclidean import EuclideanHeuristic
from .octile import OctileHeuristic
from .zero import ZeroHeuristic


__all__ = [
    "Heuristic",
    "EuclideanHeuristic",
    "OctileHeuristic",
    "ZeroHeuristic",
]
