"""Health check response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    ok: bool = True
    message: str = "ok"
    time: datetime
    version: str
    environment: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": True,
                "message": "ok",
                "time": "2026-01-01T00:00:00+00:00",
                "version": "0.1.0",
                "environment": "development",
            }
        }
    )
