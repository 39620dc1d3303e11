import hashlib

import pytest

from santa_hints import create_app
from santa_hints.services.store import InMemoryParticipantStore


ADMIN_PASSWORD = "hunter2"
ROSTER = ["Britten", "Manivald", "Dima", "Sasha", "Henrik", "Andreas"]


class FixedOrder:
    """Stands in for random.Random: 'shuffles' ids into a chosen order."""

    def __init__(self, order):
        self.order = list(order)

    def shuffle(self, seq):
        assert sorted(seq) == sorted(self.order)
        seq[:] = self.order


def follow_cycle(records):
    """Walk gives_to edges from the first record; returns the visited ids."""
    by_id = {r.id: r for r in records}
    start = records[0].id
    visited = [start]
    current = by_id[start].gives_to_id
    while current != start:
        visited.append(current)
        current = by_id[current].gives_to_id
    return visited


@pytest.fixture
def memory_store():
    return InMemoryParticipantStore()


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'santa.db'}",
        "WTF_CSRF_ENABLED": False,
        "RATELIMIT_ENABLED": False,
        "ADMIN_PASS_HASH": hashlib.sha256(ADMIN_PASSWORD.encode("utf-8")).hexdigest(),
        "SANTA_ROSTER": ROSTER,
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert resp.get_json() == {"success": True}
    return client


@pytest.fixture
def roster(admin_client):
    """Regenerates through the API and returns {name: code, gives_to_name}."""
    resp = admin_client.post("/api/admin/regenerate")
    assert resp.status_code == 200
    return {p["name"]: p for p in resp.get_json()["participants"]}
