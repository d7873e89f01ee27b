"""Health endpoints: executables on PATH and storage directories."""

import os
from enum import Enum
from pathlib import Path

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ffmpeg_processor.api.dependencies import FactoryDep, SettingsDep

router = APIRouter()


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealth(BaseModel):
    """State of one executable or directory."""

    name: str = Field(description="Executable or directory setting name")
    status: HealthStatus
    message: str | None = Field(default=None, description="Resolved path or problem")


class HealthResponse(BaseModel):
    status: HealthStatus = Field(
        description="unhealthy without ffmpeg/ffprobe, degraded on directory problems"
    )
    version: str
    environment: str
    components: list[ComponentHealth] = Field(default_factory=list)


class LivenessResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    ready: bool = Field(description="True once ffmpeg and ffprobe are on PATH")
    checks: dict[str, bool] = Field(default_factory=dict)


def _executable_health(binary: str, found: bool) -> ComponentHealth:
    if found:
        return ComponentHealth(name=binary, status=HealthStatus.HEALTHY)
    return ComponentHealth(
        name=binary,
        status=HealthStatus.UNHEALTHY,
        message="Executable not found in PATH",
    )


def _directory_health(name: str, directory: str) -> ComponentHealth:
    path = Path(directory)
    if not (path.is_dir() and os.access(path, os.W_OK)):
        return ComponentHealth(
            name=name,
            status=HealthStatus.UNHEALTHY,
            message=f"{path} does not exist or is not writable",
        )
    return ComponentHealth(
        name=name, status=HealthStatus.HEALTHY, message=str(path.resolve())
    )


def _overall(
    executables: list[ComponentHealth], directories: list[ComponentHealth]
) -> HealthStatus:
    # Nothing can be processed without the executables
    if any(c.status is HealthStatus.UNHEALTHY for c in executables):
        return HealthStatus.UNHEALTHY
    if any(c.status is HealthStatus.UNHEALTHY for c in directories):
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report executable availability and storage directory state.",
)
async def health_check(settings: SettingsDep, factory: FactoryDep) -> HealthResponse:
    executables = [
        _executable_health(binary, found)
        for binary, found in factory.get_media_processor().is_available().items()
    ]
    directories = [
        _directory_health("uploads_dir", settings.storage.uploads_dir),
        _directory_health("output_dir", settings.storage.output_dir),
    ]
    return HealthResponse(
        status=_overall(executables, directories),
        version=settings.app.version,
        environment=settings.app.environment,
        components=executables + directories,
    )


@router.get("/health/live", response_model=LivenessResponse, summary="Liveness probe")
async def liveness() -> LivenessResponse:
    """The process is up and serving requests."""
    return LivenessResponse()


@router.get("/health/ready", response_model=ReadinessResponse, summary="Readiness probe")
async def readiness(factory: FactoryDep) -> ReadinessResponse:
    checks = factory.get_media_processor().is_available()
    return ReadinessResponse(ready=all(checks.values()), checks=checks)
