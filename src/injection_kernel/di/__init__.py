from .inject import Injectable, Injected, LazyInjected, autowire
from .keys import describe_type, is_convertible, static_type_key, type_key
from .registry import (
    Registry,
    register,
    register_constructor,
    register_factory,
    register_instance,
    resolve,
)

__all__ = [
    "Registry",
    "register",
    "register_constructor",
    "register_factory",
    "register_instance",
    "resolve",
    "Injectable",
    "Injected",
    "LazyInjected",
    "autowire",
    "describe_type",
    "is_convertible",
    "static_type_key",
    "type_key",
]
