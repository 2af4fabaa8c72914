# =============================================================================
# core/services/user_service.py - User Store
# =============================================================================
# Handles user CRUD operations against the users table.
# Separates HTTP concerns from database/business logic.
#
# Every call opens its own session; nothing is cached in-process.
# Updates are conditional on the row's version, so two writers racing on
# the same user can't silently overwrite each other.
# =============================================================================

import logging
from typing import Any

from sqlalchemy import text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from app.exceptions import (
    InvalidFieldError,
    PersistenceError,
    UpdateConflictError,
    UserNotFoundError,
)
from core.models.user import User
from lib.security import hash_password
from lib.utils import format_date_created, new_user_id

logger = logging.getLogger(__name__)

# Columns that may be changed after insert
MUTABLE_FIELDS = ("full_name", "email", "password", "image_uri")


class UserService:
    """
    Persistence interface over the users table.

    Provides a clean interface between API routes / the upload pipeline
    and the database.
    """

    def __init__(self, engine: Engine, default_image_uri: str = ""):
        self._engine = engine
        self._default_image_uri = default_image_uri

    @property
    def engine(self) -> Engine:
        return self._engine

    def _session(self) -> Session:
        return Session(self._engine, expire_on_commit=False)

    @staticmethod
    def lookup_fields() -> list[str]:
        """Column names accepted by find_by_field."""
        return list(User.model_fields.keys())

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_user(self, full_name: str, email: str, password: str) -> User:
        """
        Build and insert a new user.

        Assigns a fresh UUID, hashes the password, sets the default image
        URI and today's date.

        Args:
            full_name: Full name
            email: Email address
            password: Plain password (hashed before storage)

        Returns:
            The inserted user

        Raises:
            PersistenceError: If the insert fails
        """
        user = User(
            id=new_user_id(),
            full_name=full_name,
            email=email,
            password=hash_password(password),
            image_uri=self._default_image_uri,
            date_created=format_date_created(),
        )
        return self.create(user)

    def create(self, user: User) -> User:
        """
        Insert a user row.

        Args:
            user: Fully populated user (id included)

        Returns:
            The inserted user

        Raises:
            PersistenceError: If the database is unreachable or the id is taken
        """
        try:
            with self._session() as session:
                session.add(user)
                session.commit()
                session.refresh(user)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create user {user.id}: {e}")
            raise PersistenceError("create", str(e))

        logger.info(f"Created user: {user.id}")
        return user

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def find_by_field(self, field_name: str, value: Any) -> User:
        """
        Get exactly one user by a single column equality match.

        When several rows match, the one with the lowest id wins.

        Args:
            field_name: Column name, case-insensitive (e.g. "id", "email")
            value: Value to compare against

        Returns:
            Matching user

        Raises:
            InvalidFieldError: If field_name isn't a users column
            UserNotFoundError: If no row matches
            PersistenceError: If the query fails
        """
        field_name = field_name.lower()
        if field_name not in User.model_fields:
            raise InvalidFieldError(field_name, self.lookup_fields())

        column = getattr(User, field_name)
        statement = select(User).where(column == value).order_by(col(User.id)).limit(1)

        try:
            with self._session() as session:
                user = session.exec(statement).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user by {field_name}: {e}")
            raise PersistenceError("find_by_field", str(e))

        if user is None:
            raise UserNotFoundError(str(value), field=field_name)

        return user

    def get_user(self, user_id: str) -> User:
        """Get a user by id."""
        return self.find_by_field("id", user_id)

    def list_all(self) -> list[User]:
        """
        List every user, ordered by id.

        Raises:
            PersistenceError: If the query fails
        """
        try:
            with self._session() as session:
                users = list(session.exec(select(User).order_by(col(User.id))).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list users: {e}")
            raise PersistenceError("list_all", str(e))

        logger.debug(f"Listed {len(users)} users")
        return users

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update(self, user: User) -> User:
        """
        Persist all mutable fields of an existing user.

        The write only applies if the stored version still equals
        user.version; on success the version is incremented on both the
        row and the passed-in object.

        Args:
            user: User previously read from the store, with changes applied

        Returns:
            The updated user

        Raises:
            UserNotFoundError: If no row has user.id
            UpdateConflictError: If the row changed since it was read
            PersistenceError: If the database write fails
        """
        expected_version = user.version
        values = {field: getattr(user, field) for field in MUTABLE_FIELDS}
        values["version"] = expected_version + 1

        statement = (
            update(User)
            .where(col(User.id) == user.id)
            .where(col(User.version) == expected_version)
            .values(**values)
        )

        try:
            with self._engine.begin() as connection:
                updated = connection.execute(statement).rowcount
                exists = updated > 0 or connection.execute(
                    text("SELECT 1 FROM users WHERE id = :id"), {"id": user.id}
                ).first() is not None
        except SQLAlchemyError as e:
            logger.error(f"Failed to update user {user.id}: {e}")
            raise PersistenceError("update", str(e))

        if not exists:
            raise UserNotFoundError(user.id)
        if updated == 0:
            raise UpdateConflictError(user.id, expected_version)

        user.version = expected_version + 1
        logger.info(f"Updated user: {user.id} (version {user.version})")
        return user

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def ping(self) -> bool:
        """Check that the database answers."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database ping failed: {e}")
            return False
