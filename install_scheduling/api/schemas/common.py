"""
Common API schemas.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by the exception handlers."""

    error: str
    message: str
    type: str
