"""Shared fixtures."""

import pytest

import db
from helpers import parent_of, task


@pytest.fixture
def scenario_data():
    """A -> B -> D, A -> C."""
    return {
        "tasks": [task("A", "In Progress"), task("B"), task("C", "Done"), task("D", "Done")],
        "relationships": [parent_of("A", "B"), parent_of("A", "C"), parent_of("B", "D")],
    }


@pytest.fixture
def tmp_db(tmp_path, monkeypatch):
    """Point the file store at a temporary directory."""
    monkeypatch.setattr(db, "DB_DIR", tmp_path)
    return tmp_path
