"""Common response schemas."""
from pydantic import BaseModel
from typing import Optional


class SuccessResponse(BaseModel):
    """Standard success response."""
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body for documentation; same shape as FastAPI's HTTPException."""
    detail: str


# OpenAPI documentation for the errors service calls can answer with
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Input rejected"},
    404: {"model": ErrorResponse, "description": "Session, student or check-in not found"},
    409: {"model": ErrorResponse, "description": "Already checked in or already checked out"},
    503: {"model": ErrorResponse, "description": "The database read or write failed"},
}
