"""taskstats: task statistics and aggregation backend"""

__version__ = "1.0.0"
