"""Health API schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = "ok"
