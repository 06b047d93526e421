import pytest
from fastapi.testclient import TestClient

from finance_tracker.core.config import Settings
from finance_tracker.main import create_app
from finance_tracker.repositories.transaction_repository import InMemoryTransactionRepository
from finance_tracker.services.transaction_service import TransactionService


@pytest.fixture
def repository():
    return InMemoryTransactionRepository()


@pytest.fixture
def service(repository):
    return TransactionService(repository)


@pytest.fixture
def client(repository):
    app = create_app(settings=Settings(STORAGE_BACKEND="memory"), repository=repository)
    return TestClient(app)
