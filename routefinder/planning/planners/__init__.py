# routefinder/planning/planners/__init__.py

from .base import SearchResult, SearchStrategy
from .bfs import bfs_search
from .dijkstra import dijkstra_search
from .a_star import a_star_search


__all__ = [
    "SearchResult",
    "SearchStrategy",
    "bfs_search",
    "dijkstra_search",
    "a_star_search",
]
