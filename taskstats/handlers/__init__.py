"""
Stats API handlers
Functions decorated with @api_handler are collected in a registry and mounted on a FastAPI app
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, TypeVar

from taskstats.core.logger import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

# Route info keyed by handler function name
_handler_registry: Dict[str, Dict[str, Any]] = {}


def api_handler(
    method: str = "POST",
    path: Optional[str] = None,
    tags: Optional[List[str]] = None,
    summary: Optional[str] = None,
    description: Optional[str] = None,
):
    """
    Register a coroutine as an API route

    The request body model is taken from the handler's own annotation, so
    FastAPI validates it before the handler runs.

    @param method - HTTP method
    @param path - Route path below the app prefix, defaults to /<function name>
    @param tags - OpenAPI tags, defaults to the handler's module name
    @param summary - OpenAPI summary, defaults to the first docstring line
    @param description - OpenAPI description, defaults to the docstring
    """
    method = method.upper()
    if method not in SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")

    def decorator(func: F) -> F:
        name = func.__name__
        module_name = func.__module__.rsplit(".", 1)[-1]
        doc = (func.__doc__ or "").strip()

        _handler_registry[name] = {
            "func": func,
            "method": method,
            "path": path or f"/{name}",
            "tags": tags or [module_name],
            "summary": summary or (doc.splitlines()[0] if doc else name),
            "description": description or doc,
        }
        return func

    return decorator


def get_registered_handlers() -> Dict[str, Dict[str, Any]]:
    """Get a copy of the handler registry"""
    return _handler_registry.copy()


def register_fastapi_routes(app: "FastAPI", prefix: str = "/api") -> None:
    """
    Mount every registered handler on the app

    @param app - FastAPI application instance
    @param prefix - Route prefix
    """
    for name, info in _handler_registry.items():
        full_path = f"{prefix}{info['path']}"
        app.add_api_route(
            full_path,
            info["func"],
            methods=[info["method"]],
            tags=info["tags"],
            summary=info["summary"],
            description=info["description"],
            response_model=None,
        )
        logger.debug(f"✓ Registered route: {info['method']} {full_path} ({name})")

    logger.info(f"FastAPI route registration completed: {len(_handler_registry)} routes")


# Import handler modules to trigger decorator registration
# ruff: noqa: E402
from . import stats

__all__ = [
    "api_handler",
    "register_fastapi_routes",
    "get_registered_handlers",
    "stats",
]
