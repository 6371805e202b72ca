"""Shared fixtures: an in-memory bill database, a fake receipt store and a test client."""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="billed-logs-"))

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from billed.api.dependencies import get_file_service, get_session_registry
from billed.core.db import Base, get_db
from billed.core.session import SessionRegistry
from billed.services.file_service import FileService
from main import app


@pytest.fixture
def db_session():
    """Yield a session on a fresh in-memory database with the bills table."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = session_factory()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def file_service() -> Mock:
    """A receipt file service that keeps nothing."""
    service = Mock(spec=FileService)
    service.save_receipt.side_effect = lambda bill_id, name, data, content_type=None: f"receipts/{bill_id}/{name}"
    service.url_for.side_effect = lambda key: f"/receipts/{key}"
    service.get_file.return_value = (b"image", "image/png")
    return service


@pytest.fixture
def client(db_session, file_service):
    """Test client with the database, receipt storage and session registry overridden."""
    registry = SessionRegistry()

    def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_file_service] = lambda: file_service
    app.dependency_overrides[get_session_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def employee_client(client):
    """Test client logged in as the employee ``a@a``."""
    response = client.post("/login", data={"email": "a@a", "type": "Employee"}, follow_redirects=False)
    if response.status_code != 303:
        msg = f"Login failed with status {response.status_code}"
        raise AssertionError(msg)
    return client
