"""
FastAPI Application Entry Point
taskstats API Server

Usage:
    # Development with auto-reload
    uvicorn taskstats.app:app --reload

    # Production
    uvicorn taskstats.app:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskstats.config.loader import get_config
from taskstats.core.logger import get_logger
from taskstats.handlers import register_fastapi_routes

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI application lifecycle management"""
    logger.info("========== taskstats Starting ==========")

    try:
        config_loader = get_config()
        logger.info(f"✓ Configuration loaded: {config_loader.config_file}")

        from taskstats.core.db import get_db

        db = get_db()
        logger.info(f"✓ Database initialized: {db.db_path}")

        logger.info("========== taskstats Ready ==========")

    except Exception as e:
        logger.error(f"Failed to initialize backend: {e}", exc_info=True)
        raise

    yield

    logger.info("========== taskstats Shutting Down ==========")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="taskstats API",
        description="Task statistics and aggregation service",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict to specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routes using the @api_handler decorator
    register_fastapi_routes(app, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "service": "taskstats API",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
            "redoc": "/redoc",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        try:
            from taskstats.core.db import get_db

            get_db().execute_query("SELECT 1")
            return {"status": "healthy", "service": "taskstats"}
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return {"status": "unhealthy", "service": "taskstats", "error": str(e)}

    logger.info("✓ FastAPI application created with routes")
    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    config = get_config()
    host = config.get("server.host", "0.0.0.0")
    port = config.get("server.port", 8000)
    debug = config.get("server.debug", False)

    logger.info(f"Starting server at http://{host}:{port}")

    uvicorn.run(
        "taskstats.app:app",
        host=host,
        port=port,
        reload=debug,
        log_level="debug" if debug else "info",
    )
