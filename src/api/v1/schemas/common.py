"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response (see ``api.exception_handlers``)."""

    error_code: str
    message: str
    details: Any | None = None
