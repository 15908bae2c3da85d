"""
──────────────────────────────────────────────────────────────
Default Kernel Router: Registry introspection
──────────────────────────────────────────────────────────────
Purpose:
    Expose which type keys are bound in which table, for
    operators checking an app's composition at runtime.

Exports:
    registry_router(registry=None) → FastAPI APIRouter instance
──────────────────────────────────────────────────────────────
"""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter

from injection_kernel.di.registry import Registry


def registry_router(registry: Optional[Registry] = None) -> APIRouter:
    router = APIRouter(prefix="", tags=["system"])

    @router.get("/diz")
    async def diz():
        """Registered keys per binding table."""
        active = registry or Registry.shared()
        return {"ok": True, "tables": active.registrations()}

    return router
