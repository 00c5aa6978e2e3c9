from typing import Any, Optional

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope wrapping every response body."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    message: Optional[str] = None
