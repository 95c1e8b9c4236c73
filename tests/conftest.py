"""Pytest configuration for repository-relative imports and shared records."""

import os
import sys

import matplotlib
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")

from burette.catalog import load_titration_catalog  # noqa: E402


@pytest.fixture(scope="session")
def catalog():
    """Validated built-in catalog, keyed by titration id."""
    return {record.id: record for record in load_titration_catalog()}
