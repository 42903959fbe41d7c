import os

import pytest

from afas_update.infrastructure.logging import set_logger
from afas_update.infrastructure.schema_registry import reset_registry


@pytest.fixture(autouse=True)
def _isolated_registry(monkeypatch: pytest.MonkeyPatch):
    """Start every test from the built-in schemas and a silent logger.

    AFAS_* variables from the developer's shell would otherwise change the
    loaded schemas and the configuration defaults.
    """
    for key in list(os.environ):
        if key.startswith("AFAS_"):
            monkeypatch.delenv(key)
    reset_registry()
    set_logger(None)
    yield
    reset_registry()
    set_logger(None)
