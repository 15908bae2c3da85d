# injection_kernel/errors.py
from __future__ import annotations
from typing import Any

from injection_kernel.di.keys import describe_type


class InjectionError(Exception):
    """Base class for all injection_kernel errors."""


class UnregisteredDependencyType(InjectionError, LookupError):
    """
    Raised by Registry.resolve() when no table holds a usable binding.

    Registration never raises; this is the only error the registry produces.
    """

    def __init__(self, requested_type: Any, key: str):
        self.requested_type = requested_type
        self.key = key
        super().__init__(
            f"No dependency registered for {describe_type(requested_type)} (key '{key}')"
        )
