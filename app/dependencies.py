# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The services are built once in the application lifespan and stored on
# app.state; these are injected into route handlers using Depends().
# =============================================================================

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.services import StorageService, UploadService, UserService


@dataclass
class AppServices:
    """Everything the routers need, wired from one Settings object."""

    settings: Settings
    users: UserService
    storage: StorageService
    uploads: UploadService


def get_services(request: Request) -> AppServices:
    """Return the services attached to the running application."""
    return request.app.state.services


def get_settings_dep(request: Request) -> Settings:
    return get_services(request).settings


def get_user_service(request: Request) -> UserService:
    return get_services(request).users


def get_storage_service(request: Request) -> StorageService:
    return get_services(request).storage


def get_upload_service(request: Request) -> UploadService:
    return get_services(request).uploads


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
StorageServiceDep = Annotated[StorageService, Depends(get_storage_service)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
