"""Pytest configuration and shared fixtures for plotgen tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make plotgen importable without installing the package
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def paraboloid():
    """3x3 mesh of z = x^2 + y^2 over [-2, 2] x [-2, 2]."""
    from plotgen import generate3d

    return generate3d(-2.0, 2.0, -2.0, 2.0, 3, 3, lambda x, y: x * x + y * y)
