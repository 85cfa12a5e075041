"""
Core package: configuration-aware logging, storage and statistics
"""
