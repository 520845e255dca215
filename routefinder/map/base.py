# routefinder/map/base.py
from abc import ABC, abstractmethod
import numpy as np


class MapBase(ABC):
    """
    栅格地图抽象基类
    """

    @property
    @abstractmethod
    def data(self) -> np.ndarray:
        """
        返回地图数据矩阵，形状 (height, width)。
        约定：True 表示可通行 (道路)，False 表示障碍物。
        """
        pass

    @property
    @abstractmethod
    def width(self) -> int:
        """网格宽度 (x方向数量)"""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """网格高度 (y方向数量)"""
        pass

    @abstractmethod
    def is_passable(self, x_idx: int, y_idx: int) -> bool:
        """检查特定网格索引是否可通行 (越界视为不可通行)"""
        pass

    @abstractmethod
    def is_inside(self, x_idx: int, y_idx: int) -> bool:
        """检查网格索引是否在地图范围内"""
        pass
