"""
Pytest configuration and fixtures for the intent chat service tests.
"""
import pytest
from fastapi.testclient import TestClient

from chatbot.config import Settings
from chatbot.infrastructure.database.memory.document_store import InMemoryDocumentStore
from chatbot.infrastructure.repositories.training_data_repository import TrainingDataRepository
from chatbot.main import create_application

COLLECTION = "trainingData"


@pytest.fixture(scope="function")
def settings():
    """Settings for an app backed by the in-memory store."""
    return Settings(STORE_BACKEND="memory", TRAINING_DATA_COLLECTION=COLLECTION)


@pytest.fixture(scope="function")
def store():
    """Create a fresh document store for each test."""
    return InMemoryDocumentStore()


@pytest.fixture(scope="function")
def repository(store):
    return TrainingDataRepository(store, collection_name=COLLECTION)


@pytest.fixture(scope="function")
def app(store, settings):
    return create_application(document_store=store, settings=settings)


@pytest.fixture(scope="function")
def client(app):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def greeting_record():
    return {"intent": "greeting", "utterances": ["hi", "hello"], "answers": ["Hello!"]}


@pytest.fixture(scope="function")
def farewell_record():
    return {"intent": "farewell", "utterances": ["bye"], "answers": ["Goodbye!"]}
