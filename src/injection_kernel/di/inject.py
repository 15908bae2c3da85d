from __future__ import annotations
import threading
from typing import Any, Generic, Optional, Type, TypeVar, overload

from loguru import logger

from .registry import Registry

"""
──────────────────────────────────────────────────────────────────────────────
Injected attributes
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Let classes declare their dependencies as attributes that are filled
    from a Registry, without knowing how the dependency was registered.

Two flavours:
    - Injected(T)      → eager: resolved by autowire(self) while the object
                         is being constructed, then never resolved again
    - LazyInjected(T)  → resolved on first read, cached on the instance

Both default to Registry.shared(), looked up when the value is resolved so
tests can swap the shared registry. A missing binding raises
UnregisteredDependencyType from construction (eager) or from the first
read (lazy); it is never swallowed.

Example:
    class SignupService(Injectable):
        mailer = Injected(Mailer)
        audit = LazyInjected(AuditLog)

    svc = SignupService()          # Mailer resolved here
    svc.audit.write(...)           # AuditLog resolved here, once
──────────────────────────────────────────────────────────────────────────────
"""

T = TypeVar("T")


class _InjectedAttribute(Generic[T]):
    """Shared descriptor plumbing: attribute name, registry lookup, cache slot."""

    def __init__(self, dependency_type: Type[T], registry: Optional[Registry] = None):
        self.dependency_type = dependency_type
        self._registry = registry
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @property
    def registry(self) -> Registry:
        return self._registry or Registry.shared()

    def resolve(self) -> T:
        return self.registry.resolve(self.dependency_type)

    def _slot(self) -> str:
        if self.name is None:
            raise TypeError(f"{type(self).__name__} must be declared as a class attribute")
        return self.name

    def __set__(self, obj: Any, value: T) -> None:
        raise AttributeError(f"injected attribute '{self.name}' is read-only")


class Injected(_InjectedAttribute[T]):
    """Eager injected attribute; filled by autowire() at construction."""

    @overload
    def __get__(self, obj: None, objtype: Optional[type] = None) -> "Injected[T]": ...
    @overload
    def __get__(self, obj: Any, objtype: Optional[type] = None) -> T: ...

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        slot = self._slot()
        if slot not in obj.__dict__:
            logger.debug(
                "[injection] {}.{} was not autowired at construction; resolving on read",
                type(obj).__name__,
                slot,
            )
            self.bind(obj)
        return obj.__dict__[slot]

    def bind(self, obj: Any) -> None:
        obj.__dict__[self._slot()] = self.resolve()


class LazyInjected(_InjectedAttribute[T]):
    """Injected attribute resolved on first read and cached for the instance's lifetime."""

    def __init__(self, dependency_type: Type[T], registry: Optional[Registry] = None):
        super().__init__(dependency_type, registry)
        self._lock = threading.RLock()

    @overload
    def __get__(self, obj: None, objtype: Optional[type] = None) -> "LazyInjected[T]": ...
    @overload
    def __get__(self, obj: Any, objtype: Optional[type] = None) -> T: ...

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        slot = self._slot()
        try:
            return obj.__dict__[slot]
        except KeyError:
            pass
        with self._lock:
            if slot not in obj.__dict__:
                obj.__dict__[slot] = self.resolve()
            return obj.__dict__[slot]

    def is_resolved(self, obj: Any) -> bool:
        return self._slot() in obj.__dict__


def autowire(obj: Any) -> None:
    """
    Resolve every eager Injected attribute declared on obj's class (and bases).
    Already bound attributes are left alone. LazyInjected attributes are skipped.
    """
    seen = set()
    for klass in type(obj).__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(attr, Injected) and name not in obj.__dict__:
                attr.bind(obj)


class Injectable:
    """Base class whose constructor autowires Injected attributes."""

    def __init__(self) -> None:
        autowire(self)
