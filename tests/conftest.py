"""Shared fixtures for optdoc tests."""

from __future__ import annotations

import logging

import pytest

from test_helpers import EXAMPLE_SCRIPT


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging.disable(logging.NOTSET)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def example_lines() -> list[str]:
    return EXAMPLE_SCRIPT.splitlines()

