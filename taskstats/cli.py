"""
taskstats CLI Interface
Command line interface implemented using Typer
"""

import json
from typing import Optional

import typer
import uvicorn

from taskstats.config.loader import get_config, load_config
from taskstats.core.logger import get_logger, setup_logging

logger = get_logger(__name__)


def start(
    host: Optional[str] = typer.Option(None, help="Server host address"),
    port: Optional[int] = typer.Option(None, help="Server port"),
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
    debug: bool = typer.Option(False, help="Enable debug mode"),
):
    """Start the taskstats API service"""
    try:
        load_config(config_file)
        setup_logging()
        config = get_config()
        host = host or config.get("server.host", "0.0.0.0")
        port = port or config.get("server.port", 8000)

        logger.info("Starting taskstats service...")
        logger.info(f"Host: {host}, Port: {port}")
        logger.info(f"Debug mode: {debug}")

        uvicorn.run(
            "taskstats.app:app",
            host=host,
            port=port,
            reload=debug,
            log_level="debug" if debug else "info",
        )

    except Exception as e:
        logger.error(f"Failed to start service: {e}")
        raise typer.Exit(1)


def init_db(
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
):
    """Initialize database"""
    from taskstats.core.db import get_db

    load_config(config_file)
    setup_logging()
    logger.info("Initializing database...")
    db = get_db()
    typer.echo(f"Database ready: {db.db_path}")


def summary(
    user_id: int = typer.Argument(..., help="User whose statistics to print"),
    year: Optional[int] = typer.Option(None, help="Year for the duration ranking"),
    top: int = typer.Option(5, help="Number of longest tasks to show"),
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
):
    """Print a JSON statistics summary for one user"""
    from taskstats.core.stats.manager import StatsManager, get_stats_manager

    load_config(config_file)
    setup_logging()
    manager = get_stats_manager()

    try:
        durations = manager.get_task_duration_ranking(user_id, year)
        payload = {
            "tasks": manager.get_task_stats(user_id).model_dump(),
            "quadrants": manager.get_quadrant_stats(user_id).model_dump(),
            "projects": manager.get_project_stats(user_id).model_dump(),
            "longestTasks": [
                item.model_dump(mode="json")
                for item in StatsManager.rank_task_durations(durations, top)
            ],
        }
    except Exception as e:
        logger.error(f"Failed to build summary: {e}")
        raise typer.Exit(1)

    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def main():
    """Main function"""
    app = typer.Typer()

    app.command()(start)
    app.command()(init_db)
    app.command()(summary)

    app()


if __name__ == "__main__":
    main()
