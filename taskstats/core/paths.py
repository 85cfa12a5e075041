"""
Path utility module
Resolves the data directory used for the default database location
"""

from pathlib import Path
from typing import Optional

from taskstats.config.loader import get_config
from taskstats.core.logger import get_logger

logger = get_logger(__name__)


def ensure_dir(dir_path: Path) -> Path:
    """
    Ensure directory exists, create if it doesn't

    Args:
        dir_path: Directory path

    Returns:
        Directory path
    """
    dir_path = Path(dir_path)
    if not dir_path.exists():
        dir_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created directory: {dir_path}")
    return dir_path


def get_data_dir(subdir: Optional[str] = None) -> Path:
    """
    Get data directory (the directory holding the active configuration file)

    Args:
        subdir: Optional subdirectory name

    Returns:
        Data directory path
    """
    data_dir = Path(get_config().config_file).expanduser().parent

    if subdir:
        data_dir = data_dir / subdir

    return ensure_dir(data_dir)


def get_db_path(db_name: str = "taskstats.db") -> Path:
    """
    Get database file path

    Args:
        db_name: Database file name

    Returns:
        Database file path
    """
    return get_data_dir() / db_name
