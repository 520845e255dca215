import os


class BenchmarkConfig:
    # --- Experiment Settings ---
    DENSITIES = [0.0, 0.1, 0.2, 0.3]    # Obstacle densities to test
    NUM_TRIALS = 10                     # Number of trials per density
    RANDOM_SEED_BASE = 1000             # Base seed for reproducibility

    # --- Output Paths ---
    _BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    _PROJECT_DIR = os.path.dirname(_BASE_DIR)
    LOG_DIR = os.path.join(_PROJECT_DIR, "logs", "experiments_strategies")

    # --- Map Parameters (cells) ---
    MAP_WIDTH = 120
    MAP_HEIGHT = 120
    MAZE_BLOCK = 6                      # Room size for the maze-like maps

    # --- Start & Goal ---
    START = (2, 2)
    GOAL = (117, 117)

    # Corridor carving waypoints for random maps
    NUM_WAYPOINTS = 3
