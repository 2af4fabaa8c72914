# =============================================================================
# tests/test_user_service.py - User Store Tests
# =============================================================================
# Tests for UserService against an in-memory SQLite database:
# - create / find_by_field round trip
# - lookups by arbitrary columns, missing rows, unknown columns
# - conditional updates (not found, stale version)
# - list ordering
# =============================================================================

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import (
    InvalidFieldError,
    PersistenceError,
    UpdateConflictError,
    UserNotFoundError,
)
from core.models.user import User
from core.services.user_service import UserService
from lib.security import pwd_context
from lib.utils import format_date_created


def make_user(user_id: str, email: str = "someone@x.io") -> User:
    return User(
        id=user_id,
        full_name=f"User {user_id}",
        email=email,
        password="hashed",
        image_uri="",
        date_created="01-02-2026",
    )


# =============================================================================
# Create
# =============================================================================

class TestCreateUser:
    """Tests for create_user / create."""

    def test_create_user_populates_generated_fields(self, ada):
        """Test that a new user gets an id, today's date and an empty image."""
        assert ada.id
        assert ada.full_name == "Ada Lovelace"
        assert ada.email == "ada@x.io"
        assert ada.image_uri == ""
        assert ada.date_created == format_date_created(date.today())
        assert ada.version == 1

    def test_password_is_hashed(self, ada):
        """Test that the stored password is a hash of the given one."""
        assert ada.password != "p"
        assert pwd_context.verify("p", ada.password)

    def test_ids_are_unique(self, user_service):
        """Test that two users never share an id."""
        first = user_service.create_user("A", "a@x.io", "p")
        second = user_service.create_user("B", "b@x.io", "p")

        assert first.id != second.id

    def test_default_image_uri_is_configurable(self, engine):
        """Test that the store applies its default image URI."""
        store = UserService(engine, default_image_uri="https://bit.ly/3mCSn2i")

        user = store.create_user("Grace Hopper", "grace@x.io", "p")

        assert user.image_uri == "https://bit.ly/3mCSn2i"

    def test_round_trip(self, user_service, ada):
        """Test that find_by_field returns the values create returned."""
        found = user_service.find_by_field("id", ada.id)

        assert found.model_dump() == ada.model_dump()

    def test_duplicate_id_raises_persistence_error(self, user_service):
        """Test that inserting an existing id fails with PersistenceError."""
        user_service.create(make_user("dup"))

        with pytest.raises(PersistenceError) as exc_info:
            user_service.create(make_user("dup"))

        assert exc_info.value.code == "PERSISTENCE_ERROR"
        assert exc_info.value.details["operation"] == "create"


# =============================================================================
# Find
# =============================================================================

class TestFindByField:
    """Tests for find_by_field."""

    def test_find_by_email(self, user_service, ada):
        """Test lookup by a non-key column."""
        found = user_service.find_by_field("email", "ada@x.io")

        assert found.id == ada.id

    def test_missing_user_raises_not_found(self, user_service):
        """Test that zero matches raise UserNotFoundError."""
        with pytest.raises(UserNotFoundError) as exc_info:
            user_service.find_by_field("id", "does-not-exist")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"field": "id", "value": "does-not-exist"}

    def test_unknown_field_is_rejected(self, user_service):
        """Test that a column name outside the table is refused."""
        with pytest.raises(InvalidFieldError) as exc_info:
            user_service.find_by_field("id; DROP TABLE users", "x")

        assert "id" in exc_info.value.details["allowed_fields"]

    def test_field_name_is_case_insensitive(self, user_service, ada):
        found = user_service.find_by_field("ID", ada.id)

        assert found.id == ada.id

    def test_multiple_matches_return_lowest_id(self, user_service):
        """Test that several matches resolve to the first by primary key."""
        user_service.create(make_user("c", email="same@x.io"))
        user_service.create(make_user("a", email="same@x.io"))
        user_service.create(make_user("b", email="same@x.io"))

        found = user_service.find_by_field("email", "same@x.io")

        assert found.id == "a"


# =============================================================================
# Update
# =============================================================================

class TestUpdate:
    """Tests for conditional update."""

    def test_update_persists_mutable_fields(self, user_service, ada):
        """Test that changes are written and the version bumps."""
        ada.image_uri = "https://test-space.fra1.digitaloceanspaces.com/x.png"
        ada.full_name = "Augusta Ada King"

        updated = user_service.update(ada)
        stored = user_service.find_by_field("id", ada.id)

        assert updated.version == 2
        assert stored.version == 2
        assert stored.image_uri == "https://test-space.fra1.digitaloceanspaces.com/x.png"
        assert stored.full_name == "Augusta Ada King"

    def test_update_does_not_touch_date_created(self, user_service, ada):
        """Test that the creation date is immutable."""
        original = ada.date_created
        ada.date_created = "01-01-1999"

        user_service.update(ada)

        assert user_service.find_by_field("id", ada.id).date_created == original

    def test_update_missing_user_raises_not_found(self, user_service):
        """Test the policy for updating an id that doesn't exist."""
        with pytest.raises(UserNotFoundError):
            user_service.update(make_user("ghost"))

    def test_stale_version_raises_conflict(self, user_service, ada):
        """Test that the second of two racing writers loses."""
        first_reader = user_service.find_by_field("id", ada.id)
        second_reader = user_service.find_by_field("id", ada.id)

        first_reader.image_uri = "https://example.com/first.png"
        user_service.update(first_reader)

        second_reader.image_uri = "https://example.com/second.png"
        with pytest.raises(UpdateConflictError) as exc_info:
            user_service.update(second_reader)

        assert exc_info.value.status_code == 409
        stored = user_service.find_by_field("id", ada.id)
        assert stored.image_uri == "https://example.com/first.png"


# =============================================================================
# List / Health
# =============================================================================

class TestListAll:
    """Tests for list_all."""

    def test_empty(self, user_service):
        assert user_service.list_all() == []

    def test_ordered_by_id(self, user_service):
        """Test deterministic ordering."""
        for user_id in ("m", "b", "x"):
            user_service.create(make_user(user_id))

        assert [u.id for u in user_service.list_all()] == ["b", "m", "x"]


class TestDatabaseFailures:
    """Tests for database errors surfacing as PersistenceError."""

    @pytest.fixture
    def broken_store(self):
        engine = MagicMock()
        engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        engine.begin.side_effect = OperationalError("UPDATE", {}, Exception("down"))
        return UserService(engine)

    def test_update_wraps_operational_error(self, broken_store):
        with pytest.raises(PersistenceError):
            broken_store.update(make_user("x"))

    @pytest.fixture
    def failing_session(self):
        session = MagicMock()
        session.exec.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with patch("core.services.user_service.Session") as session_cls:
            session_cls.return_value.__enter__.return_value = session
            yield session

    def test_find_by_field_wraps_operational_error(self, user_service, failing_session):
        with pytest.raises(PersistenceError) as exc_info:
            user_service.find_by_field("id", "x")

        assert exc_info.value.details["operation"] == "find_by_field"
        failing_session.exec.assert_called_once()

    def test_list_all_wraps_operational_error(self, user_service, failing_session):
        with pytest.raises(PersistenceError) as exc_info:
            user_service.list_all()

        assert exc_info.value.details["operation"] == "list_all"

    def test_ping_reports_failure(self, broken_store):
        assert broken_store.ping() is False

    def test_ping_reports_success(self, user_service):
        assert user_service.ping() is True
