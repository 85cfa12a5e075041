"""
Task statistics

Date helpers, task-date predicates and the StatsManager aggregators.
"""
