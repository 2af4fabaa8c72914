# =============================================================================
# core/models/user.py - User Table and Schemas
# =============================================================================
# These models define both the persisted row and the API contract:
# - User: SQLModel table mapped to "users"
# - UserCreate: Input for creating a new user
# - UserResponse / UserList: Output when returning users to clients
# - ProfileImageUploadResponse: Output of a successful image upload
#
# The password and version columns never leave the service layer.
# =============================================================================

from pydantic import BaseModel, Field as PydanticField, field_validator
from sqlmodel import Field, SQLModel

# Layout of date_created, e.g. "10-19-2026"
DATE_CREATED_FORMAT = "%m-%d-%Y"


class User(SQLModel, table=True):
    """
    A user account row.

    `id` is assigned once at creation and never changes. `image_uri` always
    points at the most recently uploaded profile image (or the configured
    default). `version` is bumped on every successful update so concurrent
    writers can detect each other.
    """

    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=36)
    full_name: str = Field(max_length=255)
    email: str = Field(max_length=255, index=True)
    password: str = Field(max_length=255)
    image_uri: str = Field(default="", max_length=2048)
    date_created: str = Field(max_length=10)
    version: int = Field(default=1)


class UserCreate(BaseModel):
    """
    Schema for creating a new user.

    Example:
        {
            "full_name": "Ada Lovelace",
            "email": "ada@x.io",
            "password": "p"
        }
    """

    full_name: str = PydanticField(
        ...,
        min_length=1,
        max_length=255,
        description="Full name of the user"
    )

    email: str = PydanticField(
        ...,
        min_length=3,
        max_length=255,
        description="Contact email address"
    )

    password: str = PydanticField(
        ...,
        min_length=1,
        max_length=255,
        description="Account password (stored hashed)"
    )

    @field_validator("email")
    @classmethod
    def email_has_at_sign(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value.strip()


class UserResponse(BaseModel):
    """
    Schema for returning user data to clients.

    Returned by:
    - POST /users
    - GET /users/{id}
    - GET /users (inside UserList)
    """

    id: str = PydanticField(..., description="Unique user identifier")
    full_name: str
    email: str
    image_uri: str = PydanticField(
        default="",
        description="Public URL of the current profile image"
    )
    date_created: str = PydanticField(
        ...,
        description="Creation date (MM-DD-YYYY)"
    )

    model_config = {"from_attributes": True}


class UserList(BaseModel):
    """All users, ordered by id."""

    users: list[UserResponse] = PydanticField(default_factory=list)
    total: int = PydanticField(default=0, ge=0)


class ProfileImageUploadResponse(BaseModel):
    """Result of attaching an uploaded image to a user."""

    success: bool = True
    user_id: str
    key: str = PydanticField(..., description="Object key in the bucket")
    image_uri: str = PydanticField(..., description="Public URL now stored on the user")
