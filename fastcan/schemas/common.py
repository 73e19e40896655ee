"""Common Pydantic schemas."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

__all__ = ["BaseResponse"]


class BaseResponse(BaseModel):
    """Base response model."""

    model_config = {"extra": "allow"}

    success: bool = True
    message: str | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

