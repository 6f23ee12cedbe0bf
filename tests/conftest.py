from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from networth_planner.app import create_app
from networth_planner.config import Settings
from networth_planner.storage import SnapshotStore


@pytest.fixture()
def store(tmp_path) -> SnapshotStore:
    return SnapshotStore(str(tmp_path / "data" / "snapshot.json"))


@pytest.fixture()
def client(store) -> FlaskClient:
    app = create_app(Settings(), store=store)
    app.config.update(TESTING=True)
    with app.test_client() as test_client:
        yield test_client
