"""
──────────────────────────────────────────────────────────────────────────────
injection_kernel.testing.fixtures
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Provide reusable pytest fixtures so tests never leak bindings into
    each other through the process-wide registry.

Exports:
    - registry        → a fresh, isolated Registry per test
    - shared_registry → a fresh Registry installed as Registry.shared()
                        for the duration of the test, then restored

Usage in your test:
    from injection_kernel.testing.fixtures import registry

    def test_mailer(registry):
        registry.register_instance(FakeMailer(), Mailer)
        assert isinstance(registry.resolve(Mailer), FakeMailer)
──────────────────────────────────────────────────────────────────────────────
"""

import pytest

from injection_kernel.config.base_settings import RegistrySettings
from injection_kernel.di.registry import Registry


@pytest.fixture()
def registry():
    """Isolated registry; warnings on, registration logging off."""
    return Registry(settings=RegistrySettings(_env_file=None))


@pytest.fixture()
def shared_registry(registry):
    """Install `registry` as the process-wide default for one test."""
    previous = Registry.use_shared(registry)
    yield registry
    Registry.use_shared(previous)
