"""
Built-in kernel routers.
──────────────────────────────────────────────────────────────
Currently includes:
 - /diz  (registered dependency keys per table)
──────────────────────────────────────────────────────────────
"""
from .registry_router import registry_router

__all__ = ["registry_router"]
