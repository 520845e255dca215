# [关键] 全局配置定义

# routefinder/config.py
from dataclasses import dataclass

from routefinder.planning.planners.base import SearchStrategy


@dataclass
class GlobalConfig:
    # 平均亮度 > road_threshold 视为道路 (0~255)
    road_threshold: int = 200
    # 无法识别的紧急等级使用的算法
    default_strategy: SearchStrategy = SearchStrategy.DIJKSTRA
    debug_mode: bool = False
    log_dir: str = "logs/route_debug"

    def __post_init__(self):
        if not 0 <= self.road_threshold <= 255:
            raise ValueError(f"road_threshold must be in [0, 255], got {self.road_threshold}")
