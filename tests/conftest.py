import os

import mongomock
import pytest
from fastapi.testclient import TestClient

# keep the real server out of the test run
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/blog_test")
os.environ["LOG_LEVEL"] = "WARNING"

from blog_api.database import connection  # noqa: E402
from blog_api.database.connection import get_db  # noqa: E402
from blog_api.main import app  # noqa: E402


@pytest.fixture
def db():
    """A fresh in-memory database per test."""
    return mongomock.MongoClient()["blog_test"]


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    # not entered as a context manager, so the lifespan never dials MongoDB
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def reset_connection():
    yield
    connection.client = None
    connection.db = None


@pytest.fixture
def blog_payload():
    return {
        "title": "First post",
        "content": "Hello, world.",
        "author": "Ada",
        "tags": ["intro", "meta"],
    }


@pytest.fixture
def create_blog(client, blog_payload):
    def _create(**overrides):
        body = dict(blog_payload, **overrides)
        response = client.post("/api/blogs", json=body)
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _create
