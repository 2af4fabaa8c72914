# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# Handles user creation and listing.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.dependencies import UserServiceDep
from core.models.user import UserCreate, UserList, UserResponse

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserCreate, users: UserServiceDep):
    """
    Create a new user.

    The user gets a generated id, today's date and the default image URI.
    Use POST /users/{id}/profile-image to attach a picture.
    """
    user = users.create_user(
        full_name=request.full_name,
        email=request.email,
        password=request.password,
    )
    return UserResponse.model_validate(user)


@router.get("", response_model=UserList)
async def list_users(users: UserServiceDep):
    """
    List all users.

    Returns every user ordered by id. No pagination.
    """
    rows = users.list_all()
    return UserList(
        users=[UserResponse.model_validate(u) for u in rows],
        total=len(rows),
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: Annotated[str, Path(description="User id")],
    users: UserServiceDep,
):
    """Get a single user by id."""
    return UserResponse.model_validate(users.get_user(user_id))
