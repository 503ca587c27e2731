"""
Shared fixtures.

The app is built without entering its lifespan, so no MongoDB server is
contacted; an in-memory mongomock database is injected instead.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


@pytest.fixture
def settings():
    return Settings(mongo_uri="mongodb://localhost:27017/bookstore_test")


@pytest.fixture
def db():
    return mongomock.MongoClient()["bookstore_test"]


@pytest.fixture
def app(settings, db):
    application = create_app(settings)
    application.state.db = db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def book_payload():
    return {"title": "Dune", "author": "Herbert", "price": 25}


@pytest.fixture
def transaction_payload():
    return {"total": 10, "confirm": "Yes", "address": "Jl. Merdeka 1"}


@pytest.fixture
def user_payload():
    return {"name": "A", "email": "a@x.com", "password": "p", "gender": "Female"}
