# routefinder/graph/__init__.py

from .graph import Graph
from .builder import GraphBuilder, build_graph, NEIGHBOR_OFFSETS

__all__ = ["Graph", "GraphBuilder", "build_graph", "NEIGHBOR_OFFSETS"]
