# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory SQLite user store
# - Storage service backed by a MagicMock S3 client
# =============================================================================

import io
import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds the application (and its Settings) at import time

os.environ.setdefault("DO_SPACE_NAME", "test-space")
os.environ.setdefault("DO_SPACE_REGION", "fra1")
os.environ.setdefault("SPACE_ENDPOINT", "https://fra1.digitaloceanspaces.com")
os.environ.setdefault("ACCESS_KEY", "test-access-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import pytest
from sqlmodel import SQLModel

from app.config import Settings
from app.dependencies import AppServices
from core.services import StorageService, UploadService, UserService
from lib.database import init_database


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings pointing at an in-memory database and a fake Space."""
    return Settings(
        _env_file=None,
        DO_SPACE_NAME="test-space",
        DO_SPACE_REGION="fra1",
        SPACE_ENDPOINT="https://fra1.digitaloceanspaces.com",
        ACCESS_KEY="test-access-key",
        SECRET_KEY="test-secret-key",
        DATABASE_URL="sqlite://",
        MAX_UPLOAD_SIZE_MB=1,
    )


@pytest.fixture
def engine(settings):
    """Fresh in-memory database with the users table."""
    engine = init_database(settings)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def user_service(engine):
    return UserService(engine)


@pytest.fixture
def s3_client():
    """MagicMock standing in for the boto3 S3 client."""
    return MagicMock()


@pytest.fixture
def storage_service(s3_client):
    return StorageService(s3_client, bucket="test-space", region="fra1")


@pytest.fixture
def upload_service(user_service, storage_service, settings):
    return UploadService(
        users=user_service,
        storage=storage_service,
        bucket=settings.DO_SPACE_NAME,
        max_upload_size_bytes=settings.max_upload_size_bytes,
    )


@pytest.fixture
def services(settings, user_service, storage_service, upload_service):
    return AppServices(
        settings=settings,
        users=user_service,
        storage=storage_service,
        uploads=upload_service,
    )


@pytest.fixture
def ada(user_service):
    """The user from the walkthrough scenario."""
    return user_service.create_user(full_name="Ada Lovelace", email="ada@x.io", password="p")


@pytest.fixture
def avatar_bytes():
    """Ten bytes of 'image' data."""
    return b"\x89PNG\r\n\x1a\n\x00\x01"


@pytest.fixture
def avatar_stream(avatar_bytes):
    return io.BytesIO(avatar_bytes)
