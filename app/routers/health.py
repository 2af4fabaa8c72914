# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# /health       process is up, plus the upload limits it enforces
# /health/ready users table reachable and the Space answers HeadBucket
# /health/live  bare liveness for the orchestrator
# =============================================================================

from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from app.dependencies import SettingsDep, StorageServiceDep, UserServiceDep

router = APIRouter()

SERVICE_NAME = "spaces-upload-api"
API_VERSION = "1.0.0"

CheckStatus = Literal["healthy", "unhealthy"]


# =============================================================================
# Response Models
# =============================================================================

class LivenessResponse(BaseModel):
    """Process liveness."""
    status: str
    timestamp: str


class HealthResponse(LivenessResponse):
    """Service identity and the upload limits in force."""
    service: str = SERVICE_NAME
    environment: str
    version: str
    max_upload_size_mb: int
    allowed_extensions: list[str]


class DependencyCheck(BaseModel):
    """Result of pinging one backing service."""
    status: CheckStatus
    target: str = Field(..., description="Database dialect or bucket name")


class UploadDependencies(BaseModel):
    """The two services a profile image upload needs."""
    users_table: DependencyCheck
    bucket: DependencyCheck


class ReadinessResponse(BaseModel):
    """Ready only when uploads can both be stored and recorded."""
    status: Literal["ready", "degraded"]
    checks: UploadDependencies
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check(ok: bool, target: str) -> DependencyCheck:
    return DependencyCheck(status="healthy" if ok else "unhealthy", target=target)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep):
    """Basic health status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
        max_upload_size_mb=settings.MAX_UPLOAD_SIZE_MB,
        allowed_extensions=settings.allowed_extensions_list,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(users: UserServiceDep, storage: StorageServiceDep):
    """
    Readiness check endpoint.

    Runs SELECT 1 against the users database and HeadBucket against the
    configured Space. Either failing reports "degraded".
    """
    database_ok = await run_in_threadpool(users.ping)
    storage_ok = await run_in_threadpool(storage.check_bucket)

    return ReadinessResponse(
        status="ready" if database_ok and storage_ok else "degraded",
        checks=UploadDependencies(
            users_table=_check(database_ok, users.engine.dialect.name),
            bucket=_check(storage_ok, storage.bucket),
        ),
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=_now())
