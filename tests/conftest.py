"""
Pytest configuration and shared fixtures.

This file adds the project root to the Python path so that tests
can import from the domain, repositories, services and api modules.
"""

import sys
from pathlib import Path

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from domain.receipt import Passenger
from repositories.memory_receipt_repository import InMemoryReceiptRepository
from services.ticketing_service import TicketingService


@pytest.fixture
def repository() -> InMemoryReceiptRepository:
    return InMemoryReceiptRepository()


@pytest.fixture
def service(repository: InMemoryReceiptRepository) -> TicketingService:
    return TicketingService(repository)


@pytest.fixture
def john() -> Passenger:
    return Passenger(name="John", surname="Doe", email="john@x.com")


@pytest.fixture
def jane() -> Passenger:
    return Passenger(name="Jane", surname="Doe", email="jane@x.com")


@pytest.fixture
def api_client(service: TicketingService):
    from api.dependencies import get_ticketing_service
    from api.main import app

    app.dependency_overrides[get_ticketing_service] = lambda: service
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
