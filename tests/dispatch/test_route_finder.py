import glob
import os
import math
import unittest

import numpy as np
import pytest

from routefinder.config import GlobalConfig
from routefinder.types import Emergency, Node, UrgencyTier
from routefinder.map import PassabilityGrid
from routefinder.planning.planners import SearchStrategy
from routefinder.dispatch.route_finder import RouteFinder
from routefinder.exceptions import ConfigurationError


def make_street_image():
    """
    10x6 的 "航拍图"：白色道路，黑色建筑
    两条横路 (y=1, y=4) 由 x=8 的竖路连起来
    """
    img = np.zeros((6, 10, 3), dtype=np.uint8)
    img[1, 0:9] = 255
    img[4, 0:9] = 255
    img[1:5, 8] = 255
    img[0, 0] = 150   # 灰色，不算道路
    return img


class TestRouteFinder(unittest.TestCase):
    def setUp(self):
        self.finder = RouteFinder.from_image(make_street_image())

    def test_image_is_classified(self):
        self.assertTrue(self.finder.is_valid_road_pixel(0, 1))
        self.assertFalse(self.finder.is_valid_road_pixel(0, 0))
        self.assertFalse(self.finder.is_valid_road_pixel(0, 2))
        self.assertFalse(self.finder.is_valid_road_pixel(-1, 1))
        self.assertEqual(self.finder.graph.node_count, self.finder.grid.passable_count)

    def test_route_by_tier(self):
        for tier, strategy in [(UrgencyTier.ROUTINE, SearchStrategy.BFS),
                               (UrgencyTier.STANDARD, SearchStrategy.DIJKSTRA),
                               (UrgencyTier.URGENT, SearchStrategy.ASTAR)]:
            result = self.finder.find_route((0, 1), (0, 4), tier=tier)
            self.assertEqual(result.strategy, strategy)
            self.assertTrue(result.found)
            self.assertEqual(result.path[0], Node(0, 1))
            self.assertEqual(result.path[-1], Node(0, 4))
            # 只能绕 x=8 的竖路：7 + 1 + 1 + 1 + 7 (斜角处用 sqrt(2) 抄近路)
            self.assertEqual(result.hops, 17)

    def test_weighted_strategies_agree(self):
        d = self.finder.find_route((0, 1), (3, 4), strategy=SearchStrategy.DIJKSTRA)
        a = self.finder.find_route((0, 1), (3, 4), strategy=SearchStrategy.ASTAR)
        self.assertAlmostEqual(d.cost, a.cost)
        self.assertAlmostEqual(d.cost, 12 + 2 * math.sqrt(2))

    def test_unknown_tier_uses_config_default(self):
        finder = RouteFinder.from_grid(PassabilityGrid.full(4, 4),
                                       GlobalConfig(default_strategy=SearchStrategy.BFS))
        self.assertEqual(finder.find_route((0, 0), (3, 3), tier="unknown").strategy, SearchStrategy.BFS)
        self.assertEqual(finder.find_route((0, 0), (3, 3)).strategy, SearchStrategy.BFS)

    def test_strategy_given_as_name(self):
        for name, strategy in [("astar", SearchStrategy.ASTAR), ("Dijkstra", SearchStrategy.DIJKSTRA),
                               ("bfs", SearchStrategy.BFS)]:
            result = self.finder.find_route((0, 1), (0, 4), strategy=name)
            self.assertEqual(result.strategy, strategy)
            self.assertTrue(result.found)
        with self.assertRaises(ConfigurationError):
            self.finder.find_route((0, 1), (0, 4), strategy="greedy")

    def test_invalid_points(self):
        with self.assertRaises(ConfigurationError):
            self.finder.find_route((0, 0), (0, 4))
        with self.assertRaises(ConfigurationError):
            self.finder.find_route((0, 1), (50, 50))

    def test_respond_resolves_emergency(self):
        emergency = Emergency(5, 4, UrgencyTier.URGENT, "fire")
        result = self.finder.respond(emergency, (0, 1))
        self.assertTrue(result.found)
        self.assertTrue(emergency.resolved)

    def test_respond_unreachable_keeps_emergency_active(self):
        finder = RouteFinder.from_grid(np.array([[1, 0, 1]]))
        emergency = Emergency(2, 0, UrgencyTier.ROUTINE, "cat in tree")
        result = finder.respond(emergency, (0, 0))
        self.assertFalse(result.found)
        self.assertFalse(emergency.resolved)

    def test_nearest_emergency(self):
        near = Emergency(2, 2, UrgencyTier.STANDARD)
        far = Emergency(9, 9, UrgencyTier.URGENT)
        done = Emergency(1, 1, UrgencyTier.ROUTINE, resolved=True)
        emergencies = [far, done, near]
        self.assertIs(RouteFinder.nearest_emergency(emergencies, 0, 0), near)
        self.assertIsNone(RouteFinder.nearest_emergency(emergencies, 0, 0, max_distance=2.0))
        self.assertIsNone(RouteFinder.nearest_emergency([], 0, 0))


def test_debug_mode_writes_log(tmp_path):
    config = GlobalConfig(debug_mode=True, log_dir=str(tmp_path))
    finder = RouteFinder.from_grid(PassabilityGrid.full(5, 5), config)
    result = finder.find_route((0, 0), (4, 4), tier=UrgencyTier.URGENT)

    assert result.found
    assert len(finder.observer.expanded_nodes) == result.expanded
    assert len(glob.glob(os.path.join(str(tmp_path), "*.log"))) == 1
    # 搜索结束后日志文件已关闭
    assert not finder.observer.logger.handlers


def test_debug_mode_records_only_latest_search(tmp_path):
    config = GlobalConfig(debug_mode=True, log_dir=str(tmp_path))
    finder = RouteFinder.from_grid(PassabilityGrid.full(6, 6), config)
    for tier in (UrgencyTier.ROUTINE, UrgencyTier.STANDARD, UrgencyTier.URGENT):
        result = finder.find_route((0, 0), (5, 3), tier=tier)
        observer = finder.observer
        assert len(observer.expanded_nodes) == result.expanded
        assert len(observer.open_set_history) == result.pushed
        assert observer.expanded_nodes[0] == Node(0, 0)
        assert not observer.logger.handlers

    assert len(glob.glob(os.path.join(str(tmp_path), "*.log"))) == 3


def test_config_rejects_bad_threshold():
    with pytest.raises(ValueError):
        GlobalConfig(road_threshold=-5)
    with pytest.raises(ValueError):
        GlobalConfig(road_threshold=256)
