from mealplanner.utilities.config import DATA_DIR, PLANNER_FILE

# Centralized paths for data files (single source of truth)
DATA_DIR = DATA_DIR.resolve()
PLANNER_FILE = PLANNER_FILE.resolve()

__all__ = ['DATA_DIR', 'PLANNER_FILE']
