# tests/conftest.py
import os

import pytest


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Each test sees a config built from its own environment."""
    from doclocator.config import get_config

    for name in list(os.environ):
        if name.startswith("DOCLOCATOR_"):
            monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()
