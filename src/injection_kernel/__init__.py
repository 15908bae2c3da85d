# injection_kernel/__init__.py
"""
injection_kernel
──────────────────────────────────────────────────────────────
A small runtime dependency registry.
Provides:
    - Registry with instance / factory / constructor / static-type tables
    - Injected / LazyInjected attributes + autowire()
    - Settings (pydantic-settings) and Loguru set-up
    - Optional FastAPI integration (injection_kernel.fastapi)
──────────────────────────────────────────────────────────────
"""

__version__ = "0.1.0"

from loguru import logger

from injection_kernel.config.base_settings import RegistrySettings, get_settings
from injection_kernel.di import (
    Injectable,
    Injected,
    LazyInjected,
    Registry,
    autowire,
    register,
    register_constructor,
    register_factory,
    register_instance,
    resolve,
    type_key,
)
from injection_kernel.errors import InjectionError, UnregisteredDependencyType
from injection_kernel.log import setup_logger

logger.disable("injection_kernel")

__all__ = [
    "Registry",
    "register",
    "register_constructor",
    "register_factory",
    "register_instance",
    "resolve",
    "type_key",
    "Injectable",
    "Injected",
    "LazyInjected",
    "autowire",
    "InjectionError",
    "UnregisteredDependencyType",
    "RegistrySettings",
    "get_settings",
    "setup_logger",
]
