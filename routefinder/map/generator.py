# routefinder/map/generator.py
import numpy as np
import random
from typing import Optional, Tuple

from .grid_map import PassabilityGrid


class MapGenerator:
    """
    测试/实验用的栅格生成器
    - random: 随机障碍 + 保证起终点连通 (沿随机路点开出一条通道)
    - split: 用一列障碍把地图切成互不连通的两半
    - maze: 规则的墙 + 随机缺口，类似迷宫的街区
    """

    def __init__(self, obstacle_density: float = 0.2, num_waypoints: int = 3, seed: Optional[int] = None):
        self.density = obstacle_density
        self.num_waypoints = num_waypoints
        self.seed = seed
        # 用独立的 RandomState，不污染全局随机数
        self._rng = np.random.RandomState(seed)
        self._py_rng = random.Random(seed)

    def random(self, width: int, height: int,
               start: Optional[Tuple[int, int]] = None,
               goal: Optional[Tuple[int, int]] = None) -> PassabilityGrid:
        # 1. 随机障碍底图 (True = 道路)
        data = self._rng.rand(height, width) >= self.density

        # 2. 指定了起终点时，开一条通道确保连通
        if start is not None and goal is not None:
            self._carve(data, start, goal)
        return PassabilityGrid(data)

    def split(self, width: int, height: int, wall_x: Optional[int] = None) -> PassabilityGrid:
        data = np.ones((height, width), dtype=bool)
        if wall_x is None:
            wall_x = width // 2
        data[:, wall_x] = False
        return PassabilityGrid(data)

    def maze(self, width: int, height: int, block: int = 4) -> PassabilityGrid:
        """
        每隔 block 个格子一堵横墙/竖墙，把地图切成小房间；
        每个房间向右、向下各开一个缺口，所以整张图是连通的。
        block 越小越像迷宫。
        """
        assert block >= 2, "block must be >= 2"
        data = np.ones((height, width), dtype=bool)
        data[block::block, :] = False
        data[:, block::block] = False

        for y in range(block, height, block):
            for x0 in range(0, width, block):
                # 缺口不能开在墙的交叉点上
                candidates = [x for x in range(x0, min(x0 + block, width)) if x % block != 0 or x == 0]
                if candidates:
                    data[y, self._py_rng.choice(candidates)] = True
        for x in range(block, width, block):
            for y0 in range(0, height, block):
                candidates = [y for y in range(y0, min(y0 + block, height)) if y % block != 0 or y == 0]
                if candidates:
                    data[self._py_rng.choice(candidates), x] = True
        return PassabilityGrid(data)

    def _carve(self, data: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]):
        height, width = data.shape
        waypoints = [(self._py_rng.randrange(width), self._py_rng.randrange(height))
                     for _ in range(self.num_waypoints)]
        waypoints.append(goal)

        cx, cy = start
        data[cy, cx] = True
        # 逐个路点逼近，每步各轴最多走 1 格 (8-连通)
        for tx, ty in waypoints:
            while (cx, cy) != (tx, ty):
                cx += int(np.sign(tx - cx))
                cy += int(np.sign(ty - cy))
                data[cy, cx] = True
