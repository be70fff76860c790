"""Shared fixtures for project board tests."""

import pytest

from projboard.components import Board
from projboard.store import ProjectStore


@pytest.fixture
def store():
    return ProjectStore()


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def recorder(store):
    """Subscribe a listener that records every snapshot it receives."""
    snapshots = []
    store.subscribe(snapshots.append)
    return snapshots
