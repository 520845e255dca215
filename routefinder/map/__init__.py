# routefinder/map/__init__.py

from .base import MapBase
from .grid_map import PassabilityGrid
from .classifier import PixelClassifier
from .generator import MapGenerator

__all__ = ["MapBase", "PassabilityGrid", "PixelClassifier", "MapGenerator"]
