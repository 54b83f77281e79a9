"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `src` package
without needing PYTHONPATH set externally.
"""
import os
import sys

import pytest
import structlog

# Compute project root: two directories above this file (src/tests -> src -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

DEMO = "A B C D A E A B A C D E D C".split()


@pytest.fixture(autouse=True)
def _reset_structlog():
    # the CLI tests reconfigure structlog globally
    yield
    structlog.reset_defaults()


@pytest.fixture
def demo_sequence():
    return list(DEMO)
