"""Service metadata and liveness schemas."""

from pydantic import BaseModel, Field


class RootResponse(BaseModel):
    """Static service metadata served at ``/``."""

    name: str
    version: str
    description: str
    status: str
    features: list[str]
    endpoints: dict[str, str]
    timestamp: str


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str = Field(default="ok", description="Always ok while the process serves")
    timestamp: str = Field(description="Current UTC timestamp")
    uptime: float = Field(description="Seconds since the application started")
    environment: str = Field(description="Deployment environment")
