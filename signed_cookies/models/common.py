"""
Common response models shared by the API routers.
"""
from pydantic import BaseModel, Field
from typing import Optional


class SuccessResponse(BaseModel):
    """Standard success response for operations."""
    success: bool = Field(True, description="Operation success status")
    message: str = Field(..., description="Human-readable message")
    data: Optional[dict] = Field(None, description="Optional response data")


class HealthResponse(BaseModel):
    status: str = "healthy"
    app_name: str
    version: str
    debug: bool
