"""Shared pytest configuration and fixtures for the DazzleForestLib suite."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzleforestlib import build_from_relation
from dazzleforestlib.testing import ForestTestHelper, record, record_key, record_parent


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running test, skipped by run_tests.py")


@pytest.fixture
def sample_records():
    """The four-record relation used throughout the suite.

    Structure:
    1
    ├── 2
    │   └── 4
    └── 3
    """
    return [
        record(1, None),
        record(2, 1),
        record(3, 1),
        record(4, 2),
    ]


@pytest.fixture
def sample_tree(sample_records):
    """The single root built from sample_records."""
    [root] = build_from_relation(sample_records, record_key, record_parent)
    return root


@pytest.fixture
def helper():
    """ForestTestHelper labelling record models by their id."""
    return ForestTestHelper(key_of=record_key)
