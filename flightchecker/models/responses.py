"""Response models for the flight quote service."""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict


class ErrorResponse(BaseModel):
    """Error response model for consistent error handling."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "QUOTES_INCOMPLETE",
                "message": "Quotes not completed in time after 6 polls, status is still UpdatesPending",
                "timestamp": "2019-11-01T10:30:00Z"
            }
        }
    )

    error: str = Field(..., description="Error code or type")
    message: str = Field(..., description="Human-readable error message")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp"
    )
