"""Pydantic schemas shared by every router."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Envelope of every non-2xx response.

    ``details`` is a list of ``{field, message, type}`` entries for
    validation failures and an object of identifiers otherwise.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "POST_NOT_FOUND",
                "message": "Post not found: 123e4567-e89b-12d3-a456-426614174000",
                "details": {"post_id": "123e4567-e89b-12d3-a456-426614174000"},
            }
        }
    )

    error_code: str
    message: str
    details: dict[str, Any] | list[dict[str, Any]] | None = None


class MessageResponse(BaseModel):
    """Confirmation body for deletions."""

    message: str
