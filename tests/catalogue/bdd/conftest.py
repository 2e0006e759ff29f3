"""Shared BDD fixtures for the catalogue."""

import pytest


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def results():
    """Products returned by the last query."""
    return []
