# routefinder/map/grid_map.py
import numpy as np
from typing import Iterable, Sequence, Tuple
from scipy.ndimage import label

from .base import MapBase
from routefinder.exceptions import ConfigurationError

# 8-连通的结构元素 (斜向也算相邻)，与 GraphBuilder 的邻接定义一致
EIGHT_CONNECTIVITY = np.ones((3, 3), dtype=bool)


class PassabilityGrid(MapBase):
    """
    二值可通行栅格 (PixelClassifier 的输出，GraphBuilder 的输入)。
    内部存储为 (height, width) 的 bool 矩阵，访问时用 [y_idx, x_idx]。
    创建后只读。
    """

    def __init__(self, data: np.ndarray):
        grid = np.asarray(data)
        if grid.ndim != 2:
            raise ConfigurationError(f"Passability grid must be 2-D, got shape {grid.shape}")
        if grid.shape[0] == 0 or grid.shape[1] == 0:
            raise ConfigurationError(f"Passability grid has zero size: {grid.shape}")

        self._grid = grid.astype(bool)  # 拷贝一份，外部修改原数组不影响这里
        self._grid.setflags(write=False)
        self._height, self._width = self._grid.shape
        self._labels = None

    @classmethod
    def from_array(cls, data: np.ndarray) -> "PassabilityGrid":
        """numpy 矩阵 (height, width)，非零即可通行"""
        return cls(data)

    @classmethod
    def from_rows(cls, rows: Sequence[str], road: str = ".") -> "PassabilityGrid":
        """
        从字符画构造，方便测试：
            ["..#",
             "..#"]
        每行是一个 y，road 字符表示可通行，其他任何字符都是障碍物。
        """
        if not rows:
            raise ConfigurationError("Passability grid has zero size: no rows")
        widths = {len(r) for r in rows}
        if len(widths) != 1:
            raise ConfigurationError(f"Rows have inconsistent widths: {sorted(widths)}")
        return cls(np.array([[c == road for c in r] for r in rows], dtype=bool))

    @classmethod
    def full(cls, width: int, height: int, passable: bool = True) -> "PassabilityGrid":
        return cls(np.full((height, width), passable, dtype=bool))

    @property
    def data(self) -> np.ndarray:
        return self._grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        return self._height, self._width

    @property
    def passable_count(self) -> int:
        return int(np.count_nonzero(self._grid))

    def is_inside(self, x_idx: int, y_idx: int) -> bool:
        return (0 <= x_idx < self._width) and (0 <= y_idx < self._height)

    def is_passable(self, x_idx: int, y_idx: int) -> bool:
        if not self.is_inside(x_idx, y_idx):
            return False  # 越界视为障碍
        return bool(self._grid[y_idx, x_idx])

    def flat_index(self, x_idx: int, y_idx: int) -> int:
        """行优先扁平索引 y * width + x"""
        return y_idx * self._width + x_idx

    def passable_cells(self) -> Iterable[Tuple[int, int]]:
        """按行优先顺序 (y 外层, x 内层) 遍历所有可通行格子"""
        ys, xs = np.nonzero(self._grid)
        return zip(xs.tolist(), ys.tolist())

    def component_labels(self) -> np.ndarray:
        """
        8-连通分量标记 (scipy.ndimage.label)，0 表示障碍物。
        懒计算并缓存，用于快速判断两点是否可能连通。
        """
        if self._labels is None:
            labels, _ = label(self._grid, structure=EIGHT_CONNECTIVITY)
            labels.setflags(write=False)
            self._labels = labels
        return self._labels

    def same_component(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        if not (self.is_passable(*a) and self.is_passable(*b)):
            return False
        labels = self.component_labels()
        return labels[a[1], a[0]] == labels[b[1], b[0]]

    def __repr__(self):
        return f"PassabilityGrid({self._width}x{self._height}, passable={self.passable_count})"
