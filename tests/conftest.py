"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from livestock_api.config import Settings
from livestock_api.main import create_app


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir: Path) -> Settings:
    """Settings with in-memory stores and a throwaway upload directory."""
    return Settings(
        _env_file=None,
        environment="test",
        azure_cosmosdb_endpoint=None,
        azure_cosmosdb_key=None,
        jwt_secret="test-secret",
        upload_dir=str(upload_dir),
        require_auth_for_listings=False,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create a FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client
