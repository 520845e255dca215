# routefinder/dispatch/route_finder.py
import logging
import math
from typing import Iterable, Optional, Tuple, Union

import numpy as np

from routefinder.config import GlobalConfig
from routefinder.types import Emergency, UrgencyTier
from routefinder.map.grid_map import PassabilityGrid
from routefinder.map.classifier import PixelClassifier
from routefinder.graph.graph import Graph
from routefinder.graph.builder import GraphBuilder
from routefinder.planning.interfaces import IPlannerObserver
from routefinder.planning.planners.base import SearchResult, SearchStrategy
from routefinder.planning.strategy import parse_strategy, search, strategy_for
from routefinder.visualization.observers import DebugObserver

logger = logging.getLogger(__name__)


class RouteFinder:
    """
    调度入口：持有一张地图 (栅格 + 图)，按紧急等级选择算法找路线。

    栅格和图在构造时一次性生成，之后只读；换地图就新建一个 RouteFinder。
    不持有 "当前选中的事件" 之类的可变状态，所有输入都通过参数传入。
    """

    def __init__(self, grid: PassabilityGrid, config: Optional[GlobalConfig] = None):
        self.config = config if config is not None else GlobalConfig()
        self._grid = grid
        self._graph = GraphBuilder().build(grid)
        # debug 模式下每次搜索新建一个 DebugObserver，这里保留最近一次的
        self._observer: Optional[IPlannerObserver] = None

        logger.info("RouteFinder ready: %dx%d map, %d road nodes",
                    grid.width, grid.height, self._graph.node_count)

    @classmethod
    def from_grid(cls, grid: Union[PassabilityGrid, np.ndarray], config: Optional[GlobalConfig] = None) -> "RouteFinder":
        if not isinstance(grid, PassabilityGrid):
            grid = PassabilityGrid(grid)
        return cls(grid, config)

    @classmethod
    def from_image(cls, pixels: np.ndarray, config: Optional[GlobalConfig] = None) -> "RouteFinder":
        """pixels: 已解码的灰度/RGB 矩阵"""
        config = config if config is not None else GlobalConfig()
        grid = PixelClassifier(config.road_threshold).classify(pixels)
        return cls(grid, config)

    @property
    def grid(self) -> PassabilityGrid:
        return self._grid

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def observer(self) -> Optional[IPlannerObserver]:
        """最近一次搜索的 DebugObserver (非 debug 模式为 None)"""
        return self._observer

    def is_valid_road_pixel(self, x: int, y: int) -> bool:
        return self._grid.is_passable(x, y)

    def find_route(self,
                   start: Tuple[int, int],
                   target: Tuple[int, int],
                   tier: Optional[Union[UrgencyTier, str]] = None,
                   strategy: Optional[Union[SearchStrategy, str]] = None) -> SearchResult:
        """
        strategy 显式给出时优先；否则由 tier 决定 (无法识别 -> config.default_strategy)。
        """
        if strategy is None:
            strategy = strategy_for(tier, default=self.config.default_strategy)
        else:
            strategy = parse_strategy(strategy)

        observer = None
        if self.config.debug_mode:
            observer = DebugObserver(log_dir=self.config.log_dir)
            self._observer = observer
        try:
            result = search(self._graph, start, target, strategy, observer=observer)
        finally:
            if observer is not None:
                observer.close()

        if result.found:
            logger.info("%s route %s -> %s: %d hops, cost %.3f, expanded %d",
                        strategy.name, start, target, result.hops, result.cost, result.expanded)
        else:
            logger.info("%s found no route %s -> %s (expanded %d)",
                        strategy.name, start, target, result.expanded)
        return result

    def respond(self, emergency: Emergency, origin: Tuple[int, int]) -> SearchResult:
        """
        从 origin 出发前往 emergency，算法由事件等级决定。
        找到路线则把事件标记为已处理。
        """
        result = self.find_route(origin, emergency.location, tier=emergency.tier)
        if result.found:
            emergency.resolved = True
        return result

    @staticmethod
    def nearest_emergency(emergencies: Iterable[Emergency], x: int, y: int,
                          max_distance: float = math.inf) -> Optional[Emergency]:
        """离 (x, y) 最近的未处理事件 (欧氏距离)，超出 max_distance 的忽略"""
        nearest = None
        min_dist = max_distance
        for emergency in emergencies:
            if emergency.resolved:
                continue
            dist = math.hypot(emergency.x - x, emergency.y - y)
            if dist < min_dist or (nearest is None and dist <= min_dist):
                min_dist = dist
                nearest = emergency
        return nearest
