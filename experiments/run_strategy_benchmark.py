import sys
import os
import time
import argparse
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# --- 路径设置 ---
# 确保能找到 routefinder 包
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from routefinder.map.generator import MapGenerator
from routefinder.graph.builder import GraphBuilder
from routefinder.planning.planners.base import SearchStrategy
from routefinder.planning.strategy import search
from experiments.benchmark_config import BenchmarkConfig as cfg


def run_trial(grid, start, goal, map_kind, density, trial_idx):
    """同一张图上依次跑三种算法，返回每种算法一行记录"""
    graph = GraphBuilder().build(grid)
    rows = []
    for strategy in SearchStrategy:
        t0 = time.perf_counter()
        result = search(graph, start, goal, strategy)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        rows.append({
            'map': map_kind,
            'density': density,
            'trial': trial_idx,
            'strategy': strategy.name,
            'success': result.found,
            'time_ms': elapsed_ms,
            'expanded': result.expanded,
            'pushed': result.pushed,
            'hops': result.hops,
            'cost': result.cost,
        })
    return rows


def run_experiment(num_trials: int = cfg.NUM_TRIALS):
    results = []

    # --- 1. 随机障碍地图 (保证起终点之间有通道) ---
    for density in cfg.DENSITIES:
        for i in range(num_trials):
            seed = cfg.RANDOM_SEED_BASE + int(density * 1000) + i
            generator = MapGenerator(obstacle_density=density, num_waypoints=cfg.NUM_WAYPOINTS, seed=seed)
            grid = generator.random(cfg.MAP_WIDTH, cfg.MAP_HEIGHT, start=cfg.START, goal=cfg.GOAL)
            results.extend(run_trial(grid, cfg.START, cfg.GOAL, 'random', density, i))

    # --- 2. 迷宫类地图 ---
    for i in range(num_trials):
        generator = MapGenerator(seed=cfg.RANDOM_SEED_BASE + i)
        grid = generator.maze(cfg.MAP_WIDTH, cfg.MAP_HEIGHT, block=cfg.MAZE_BLOCK)
        results.extend(run_trial(grid, cfg.START, cfg.GOAL, 'maze', 0.0, i))

    return pd.DataFrame(results)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    return (df.groupby(['map', 'density', 'strategy'])
              .agg(success_rate=('success', 'mean'),
                   time_ms=('time_ms', 'mean'),
                   expanded=('expanded', 'mean'),
                   hops=('hops', 'mean'),
                   cost=('cost', 'mean'))
              .reset_index())


def plot_summary(summary: pd.DataFrame, out_file: str):
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    for ax, metric in zip(axes, ['expanded', 'time_ms']):
        pivot = summary.pivot_table(index=['map', 'density'], columns='strategy', values=metric)
        pivot.plot(kind='bar', ax=ax)
        ax.set_title(f"Mean {metric}")
        ax.grid(True, linestyle=':', alpha=0.3)
    plt.tight_layout()
    plt.savefig(out_file)
    plt.close(fig)


def main():
    parser = argparse.ArgumentParser(description="Compare BFS / Dijkstra / A* on generated road maps")
    parser.add_argument("--trials", type=int, default=cfg.NUM_TRIALS)
    parser.add_argument("--out", default=cfg.LOG_DIR)
    args = parser.parse_args()

    os.makedirs(args.out, exist_ok=True)
    timestamp = time.strftime("%Y%m%d_%H%M%S")

    df = run_experiment(args.trials)
    summary = summarize(df)

    print(f"{'Map':<8} | {'Density':<8} | {'Algo':<10} | {'Succ%':<6} | {'Time(ms)':<9} | {'Nodes':<9} | {'Cost':<8}")
    print("-" * 80)
    for _, row in summary.iterrows():
        print(f"{row['map']:<8} | {row['density']:<8.2f} | {row['strategy']:<10} | "
              f"{row['success_rate'] * 100:<6.1f} | {row['time_ms']:<9.2f} | {row['expanded']:<9.1f} | {row['cost']:<8.2f}")

    df.to_csv(os.path.join(args.out, f"raw_{timestamp}.csv"), index=False)
    summary.to_csv(os.path.join(args.out, f"summary_{timestamp}.csv"), index=False)
    plot_summary(summary, os.path.join(args.out, f"summary_{timestamp}.png"))
    print(f"\nResults saved to {args.out}")


if __name__ == "__main__":
    main()
