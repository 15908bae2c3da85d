import pytest
from loguru import logger

from injection_kernel.testing.fixtures import registry, shared_registry  # noqa: F401


@pytest.fixture()
def log_records():
    """Collect injection_kernel loguru records emitted during the test."""
    records = []
    logger.enable("injection_kernel")
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
    logger.disable("injection_kernel")
