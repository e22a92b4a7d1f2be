"""Pytest fixtures for lightning-nodes tests."""

from pathlib import Path

import pytest

from lightning_nodes.config import ENV_FIELDS
from lightning_nodes.models.node import Node
from lightning_nodes.store import SqliteNodeStore


@pytest.fixture
def sample_rankings_payload() -> list[dict]:
    """Two entries shaped like the mempool.space connectivity ranking."""
    return [
        {
            "publicKey": "03864ef025fde8fb587d989186ce6a4a186895ee44a926bfc370e2c366597a3f8f",
            "alias": "ACINQ",
            "channels": 3120,
            "capacity": 100_000_000,
            "firstSeen": 1_234_567_890,
            "updatedAt": 1_700_000_000,
            "city": None,
            "country": {"en": "France"},
        },
        {
            "publicKey": "035e4ff418fc8b5554c5d9eea66396c227bd429a3251c8cbc711002ba215bfc226",
            "capacity": 0,
            "firstSeen": 10**15,
        },
    ]


@pytest.fixture
def temp_db(tmp_path: Path) -> Path:
    """Temporary database path for isolated tests."""
    return tmp_path / "nodes.db"


@pytest.fixture
def store(temp_db: Path) -> SqliteNodeStore:
    """SqliteNodeStore with schema on a temporary database."""
    return SqliteNodeStore(temp_db)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Unset every setting variable; anything set during the test is removed afterwards."""
    for name in ENV_FIELDS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


def make_node(public_key: str = "pk1", alias: str = "alias1") -> Node:
    return Node(
        public_key=public_key,
        alias=alias,
        capacity="1.00000000",
        first_seen="2009-02-13T23:31:30Z",
    )
