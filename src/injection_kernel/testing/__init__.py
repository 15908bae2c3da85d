"""
Testing utilities for injection_kernel users.
──────────────────────────────────────────────────────────────
Provides pytest fixtures handing out isolated registries.
──────────────────────────────────────────────────────────────
"""
from .fixtures import registry, shared_registry

__all__ = ["registry", "shared_registry"]
