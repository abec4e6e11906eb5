"""Shared fixtures for FairMines tests."""

import pytest
from fastapi.testclient import TestClient

from fairmines.services.balance_store import BalanceStore
from fairmines.services.game_service import GameController, get_controller


@pytest.fixture
def store(tmp_path):
    """Balance store backed by a temporary file."""
    return BalanceStore(path=str(tmp_path / "balance.json"), key="mines_mock_balance", starting_balance=1000.0)


@pytest.fixture
def controller(store):
    """Fresh controller with a clean balance."""
    return GameController(store=store)


@pytest.fixture
def client(controller):
    """API client wired to the test controller."""
    from fairmines.main import app

    app.dependency_overrides[get_controller] = lambda: controller
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
