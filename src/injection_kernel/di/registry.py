from __future__ import annotations

import inspect
import threading
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, get_type_hints

from loguru import logger

from injection_kernel.config.base_settings import RegistrySettings, get_settings
from injection_kernel.di.keys import describe_type, is_convertible, static_type_key, type_key
from injection_kernel.errors import UnregisteredDependencyType

"""
──────────────────────────────────────────────────────────────────────────────
Dependency Registry
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Hold the four binding tables (instances, factories, constructors and
    static types) keyed by type key, and resolve a requested type against
    them in a fixed order.

Resolution order (first usable binding wins):
    1. constructor  → called on every resolve
    2. factory      → called on every resolve
    3. instance     → returned as-is
    4. static type  → the class itself, stored under "<key>.Type"

    A binding whose value is not an instance of the requested type is
    skipped and the next table is tried.

Override:
    register_instance / register_factory / register_constructor with
    override=True first purge the key from all four tables.
    register(static_type, ...) never purges.

APIs:
    - Registry()            → isolated registry (tests)
    - Registry.shared()     → process-wide default
    - register_instance / register_factory / register_constructor /
      register / resolve    → module-level shortcuts onto Registry.shared()

Usage:
    register_instance(SmtpMailer(), Mailer)
    register_factory(make_session)            # keyed by its return annotation
    register_factory(lambda: Clock(), Clock)  # explicit key
    mailer = resolve(Mailer)
──────────────────────────────────────────────────────────────────────────────
"""

T = TypeVar("T")

_MISSING = object()


def _declared_return_type(factory: Callable[..., Any]) -> Any:
    """Return annotation of `factory`, or None when it has none."""
    if inspect.isclass(factory):
        return factory
    target = factory if inspect.isroutine(factory) else getattr(factory, "__call__", factory)
    try:
        returned = get_type_hints(target).get("return")
    except (NameError, TypeError, AttributeError):
        # unresolvable forward reference, keep the raw string
        returned = getattr(target, "__annotations__", {}).get("return")
    if returned is None or returned is type(None):
        return None
    return returned


class Registry:
    """Type-keyed dependency registry."""

    _shared: Optional["Registry"] = None
    _shared_lock = threading.Lock()

    def __init__(self, settings: Optional[RegistrySettings] = None):
        self.settings = settings or get_settings()
        self._instances: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._constructors: Dict[str, Callable[[], Any]] = {}
        self._static_types: Dict[str, Type[Any]] = {}
        self._origins: Dict[str, str] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Process-wide default
    # ------------------------------------------------------------------
    @classmethod
    def shared(cls) -> "Registry":
        """Return the default registry, creating it on first use."""
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
        return cls._shared

    @classmethod
    def use_shared(cls, registry: Optional["Registry"]) -> Optional["Registry"]:
        """Swap the default registry and return the previous one (tests)."""
        with cls._shared_lock:
            previous, cls._shared = cls._shared, registry
        return previous

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_instance(self, instance: Any, type_: Any, override: bool = False) -> None:
        """Register a shared instance, returned unchanged on every resolve."""
        key = type_key(type_)
        with self._lock:
            self._track(type_, key)
            self._remove_if_overridden(key, override)
            if key not in self._instances or override:
                self._instances[key] = instance
                self._log("instance", key)

    def register_factory(
        self, factory: Callable[[], Any], type_: Any = None, override: bool = False
    ) -> None:
        """
        Register a zero-argument factory, invoked on every resolve.
        The key is `type_` when given, otherwise the factory's return
        annotation (lambdas and partials need `type_`).
        """
        dependency_type = type_ if type_ is not None else _declared_return_type(factory)
        if dependency_type is None:
            logger.warning(
                "[injection] factory {!r} has no return annotation and no type_; registration skipped",
                factory,
            )
            return
        key = type_key(dependency_type)
        with self._lock:
            self._track(dependency_type, key)
            self._remove_if_overridden(key, override)
            if key not in self._factories or override:
                self._factories[key] = factory
                self._log("factory", key)

    def register_constructor(
        self, constructor: Callable[[], Any], type_: Any, override: bool = False
    ) -> None:
        """
        Register a constructor function under `type_`, invoked on every resolve.
        Unlike factories, the key is explicit and may differ from what the
        function is annotated to return.
        """
        key = type_key(type_)
        with self._lock:
            self._track(type_, key)
            self._remove_if_overridden(key, override)
            if key not in self._constructors or override:
                self._constructors[key] = constructor
                self._log("constructor", key)

    def register(self, static_type: Type[Any], for_type: Any, override: bool = False) -> None:
        """
        Bind a class (not an instance) to `for_type`; resolve it with
        resolve(type[for_type]). Does not purge other tables on override.
        """
        key = static_type_key(for_type)
        with self._lock:
            if key not in self._static_types or override:
                self._static_types[key] = static_type
                self._log("static type", key)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve(self, dependency_type: Type[T]) -> T:
        """
        Return a value for `dependency_type`.
        Raises UnregisteredDependencyType when no table has a usable binding.
        """
        key = type_key(dependency_type)
        with self._lock:
            candidates = [
                ("constructor", self._constructors.get(key, _MISSING), True),
                ("factory", self._factories.get(key, _MISSING), True),
                ("instance", self._instances.get(key, _MISSING), False),
                ("static type", self._static_types.get(key, _MISSING), False),
            ]

        # callables run outside the lock so they may resolve their own deps
        for table, binding, invoke in candidates:
            if binding is _MISSING:
                continue
            dependency = binding() if invoke else binding
            if is_convertible(dependency, dependency_type):
                return dependency
            logger.debug(
                "[injection] {} binding for '{}' is not a {}; trying next table",
                table,
                key,
                describe_type(dependency_type),
            )

        raise UnregisteredDependencyType(dependency_type, key)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def is_registered(self, type_: Any) -> bool:
        key = type_key(type_)
        with self._lock:
            return any(key in table for table in self._tables().values())

    def registrations(self) -> Dict[str, List[str]]:
        """Snapshot of registered keys per table."""
        with self._lock:
            return {name: sorted(table) for name, table in self._tables().items()}

    def reset(self) -> None:
        """Drop every binding (tests)."""
        with self._lock:
            for table in self._tables().values():
                table.clear()
            self._origins.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _tables(self) -> Dict[str, Dict[str, Any]]:
        return {
            "constructors": self._constructors,
            "factories": self._factories,
            "instances": self._instances,
            "static_types": self._static_types,
        }

    def _remove_if_overridden(self, key: str, overridden: bool) -> None:
        if not overridden:
            return
        for table in self._tables().values():
            table.pop(key, None)
        if self.settings.log_registrations:
            logger.debug("[injection] purged '{}' from all tables", key)

    def _track(self, type_: Any, key: str) -> None:
        # same-named classes from different modules share a key
        if not isinstance(type_, type):
            return
        described = describe_type(type_)
        known = self._origins.get(key)
        if known is not None and known != described and self.settings.warn_on_key_collision:
            logger.warning(
                "[injection] {} and {} share the type key '{}'", known, described, key
            )
        self._origins[key] = described

    def _log(self, table: str, key: str) -> None:
        if self.settings.log_registrations:
            logger.debug("[injection] registered {} for '{}'", table, key)


# ──────────────────────────────────────────────────────────────
# Module-level shortcuts bound to the default registry
# ──────────────────────────────────────────────────────────────
def register_instance(instance: Any, type_: Any, override: bool = False) -> None:
    Registry.shared().register_instance(instance, type_, override=override)


def register_factory(factory: Callable[[], Any], type_: Any = None, override: bool = False) -> None:
    Registry.shared().register_factory(factory, type_, override=override)


def register_constructor(constructor: Callable[[], Any], type_: Any, override: bool = False) -> None:
    Registry.shared().register_constructor(constructor, type_, override=override)


def register(static_type: Type[Any], for_type: Any, override: bool = False) -> None:
    Registry.shared().register(static_type, for_type, override=override)


def resolve(dependency_type: Type[T]) -> T:
    return Registry.shared().resolve(dependency_type)
