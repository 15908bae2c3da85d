# injection_kernel/fastapi.py (framework)
"""
──────────────────────────────────────────────────────────────
injection_kernel.fastapi
──────────────────────────────────────────────────────────────
Purpose:
    Use registry-resolved dependencies from FastAPI routes.

Exports:
    - provide(T)              → callable for Depends(), resolves T per request
    - add_error_handlers(app) → UnregisteredDependencyType → 500 JSON envelope
    - create_app(...)         → app with error handlers + /diz router

Usage:
    @router.post("/signup")
    async def signup(mailer: Mailer = Depends(provide(Mailer))):
        ...
──────────────────────────────────────────────────────────────
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Type, TypeVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from injection_kernel.api.registry_router import registry_router
from injection_kernel.di.keys import describe_type
from injection_kernel.di.registry import Registry
from injection_kernel.errors import UnregisteredDependencyType

T = TypeVar("T")


def provide(dependency_type: Type[T], registry: Optional[Registry] = None) -> Callable[[], T]:
    """Build a FastAPI dependency resolving `dependency_type` on every request."""

    def _provider():
        return (registry or Registry.shared()).resolve(dependency_type)

    _provider.__name__ = f"provide_{describe_type(dependency_type).rsplit('.', 1)[-1]}"
    return _provider


def error_envelope(code: str, message: str, details=None):
    return {"error": {"code": code, "message": message, "details": details or {}}}


async def unregistered_dependency_handler(request: Request, exc: UnregisteredDependencyType):
    logger.error("[injection] {} {}: {}", request.method, request.url.path, exc)
    return JSONResponse(
        error_envelope("UNREGISTERED_DEPENDENCY", str(exc), {"key": exc.key}),
        status_code=500,
    )


def add_error_handlers(app: FastAPI) -> None:
    """Attach the registry exception handler to app."""
    app.add_exception_handler(UnregisteredDependencyType, unregistered_dependency_handler)
    logger.info("[injection] error handlers registered")


def create_app(
    *,
    title: str = "App",
    registry: Optional[Registry] = None,
    routers: Iterable[Any] = (),
) -> FastAPI:
    """
    App factory wiring the registry into FastAPI.
    Adds error handlers, the /diz router and any extra routers.
    """
    app = FastAPI(title=title)
    app.state.registry = registry or Registry.shared()

    add_error_handlers(app)
    app.include_router(registry_router(app.state.registry))
    mount_routers(app, routers)

    logger.info("[injection] app '{}' ready", title)
    return app


def mount_routers(app: FastAPI, routers: Iterable[Any]) -> None:
    for r in routers:
        app.include_router(r)
