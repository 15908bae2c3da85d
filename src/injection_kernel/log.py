# injection_kernel/log.py
"""
Logging set-up using Loguru.
The package is silent until setup_logger() is called.
"""
from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from injection_kernel.config.base_settings import RegistrySettings, get_settings

_PACKAGE = "injection_kernel"
_handler_id: Optional[int] = None


def setup_logger(settings: Optional[RegistrySettings] = None) -> None:
    """Enable injection_kernel logs and (re)install the stderr sink."""
    global _handler_id
    settings = settings or get_settings()

    if _handler_id is not None:
        logger.remove(_handler_id)

    _handler_id = logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        filter=_PACKAGE,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )
    logger.enable(_PACKAGE)
