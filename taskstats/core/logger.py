"""
Logging setup
Console output plus rotating taskstats.log / error.log files, configured from the [logging] section
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional

from taskstats.config.loader import get_config

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

_SIZE_UNITS = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}


def _to_level(name: Any, default: int = logging.INFO) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default


class LoggerManager:
    """Log manager

    Besides the global level, ``logging.levels`` may map logger names to
    their own level, e.g. ``"uvicorn.access" = "WARNING"``.
    """

    def __init__(self):
        self._loggers: Dict[str, logging.Logger] = {}
        self._setup_root_logger()

    def _setup_root_logger(self):
        """Setup root logger"""
        config = get_config()

        logs_dir = Path(config.get("logging.logs_dir", "./logs"))
        max_bytes = self._parse_size(config.get("logging.max_file_size", "10MB"))
        backup_count = int(config.get("logging.backup_count", 5))

        logs_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(_to_level(config.get("logging.level", "INFO")))
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

        root_logger.addHandler(
            self._rotating_handler(logs_dir / "taskstats.log", logging.DEBUG, max_bytes, backup_count)
        )
        root_logger.addHandler(
            self._rotating_handler(logs_dir / "error.log", logging.ERROR, max_bytes, backup_count)
        )

        self._apply_module_levels(config.get("logging.levels", {}) or {})

    @staticmethod
    def _rotating_handler(
        path: Path, level: int, max_bytes: int, backup_count: int
    ) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
        return handler

    @staticmethod
    def _apply_module_levels(levels: Dict[str, Any]) -> None:
        """Set per-logger levels; unknown level names are reported and skipped"""
        for name, level_name in levels.items():
            level = _to_level(level_name, default=-1)
            if level < 0:
                logging.getLogger(__name__).warning(
                    f"Ignoring unknown log level {level_name!r} for logger {name}"
                )
                continue
            logging.getLogger(name).setLevel(level)

    @staticmethod
    def _parse_size(size_str) -> int:
        """Parse file size string such as 10MB, 512KB or a plain byte count"""
        size_str = str(size_str).strip().upper()
        for unit, factor in _SIZE_UNITS.items():
            if size_str.endswith(unit):
                return int(size_str[: -len(unit)]) * factor
        return int(size_str)

    def get_logger(self, name: str) -> logging.Logger:
        """Get logger with specified name"""
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]


# Created on first use so importing a module never touches the config early
_logger_manager: Optional[LoggerManager] = None


def get_logger(name: str) -> logging.Logger:
    """Convenience function to get logger"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()

    return _logger_manager.get_logger(name)


def setup_logging():
    """(Re)apply logging configuration"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()
    else:
        _logger_manager._setup_root_logger()
