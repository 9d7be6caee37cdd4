"""Response models for API endpoints."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str = Field(
        ...,
        description="Error message describing what went wrong",
        examples=["Post not found: hello-world"]
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(
        ...,
        description="Service status",
        examples=["ok"]
    )


class RootResponse(BaseModel):
    """API information response model."""

    message: str = Field(
        ...,
        description="API name",
        examples=["Portfolio Content API"]
    )
    version: str = Field(
        ...,
        description="API version",
        examples=["1.0.0"]
    )
