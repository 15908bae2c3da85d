# injection_kernel/di/keys.py
"""
Type keys
──────────────────────────────────────────────
Every binding table is keyed by a plain string derived from the type:

    app.services.mailer.Mailer   →  "Mailer"
    type[Mailer]                 →  "Mailer.Type"
    "pkg.Mailer" (string key)    →  "Mailer"
    Optional[Mailer]             →  "Mailer"

Only the last dotted segment is kept, so two classes named `Mailer`
living in different modules share one key. That is intentional and
kept for compatibility; the registry warns about it, nothing more.
──────────────────────────────────────────────
"""
from __future__ import annotations
import types
from typing import Any, Union, get_args, get_origin

STATIC_SUFFIX = ".Type"

_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))


def _unwrap_optional(t: Any) -> Any:
    """Optional[X] and X | None key and check as X; other unions are left alone."""
    if get_origin(t) in _UNION_ORIGINS:
        args = [a for a in get_args(t) if a is not type(None)]
        if len(args) == 1 and len(get_args(t)) == 2:
            return args[0]
    return t


def _is_type_of(t: Any) -> bool:
    return get_origin(t) is type and len(get_args(t)) == 1


def describe_type(t: Any) -> str:
    """Fully-qualified, human readable description of a type (or type key)."""
    t = _unwrap_optional(t)
    if isinstance(t, str):
        return t
    if _is_type_of(t):
        return describe_type(get_args(t)[0]) + STATIC_SUFFIX
    if isinstance(t, type):
        return f"{t.__module__}.{t.__qualname__}"
    return repr(t)


def last_type_segment(name: str) -> str:
    return name.rsplit(".", 1)[-1]


def type_key(t: Any) -> str:
    """Return the registry key for `t`."""
    t = _unwrap_optional(t)
    if _is_type_of(t):
        return type_key(get_args(t)[0]) + STATIC_SUFFIX
    return last_type_segment(describe_type(t))


def static_type_key(t: Any) -> str:
    """Key of the static-type slot for `t` (same as type_key(type[t]))."""
    return type_key(t) + STATIC_SUFFIX


def is_convertible(value: Any, t: Any) -> bool:
    """
    Runtime check that a stored binding may be handed out as `t`.

    A False result makes resolve() move on to the next table.
    """
    if isinstance(t, str) or t is Any:
        return True
    unwrapped = _unwrap_optional(t)
    if unwrapped is not t:
        return value is None or is_convertible(value, unwrapped)
    if _is_type_of(t):
        target = get_args(t)[0]
        if not isinstance(value, type):
            return False
        if not isinstance(target, type):
            return True
        return issubclass(value, target)
    check = get_origin(t) or t
    try:
        return isinstance(value, check)
    except TypeError:
        # not checkable at runtime (typing special forms, plain Protocols)
        return True
