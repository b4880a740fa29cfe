"""Authentication schemas."""
from pydantic import BaseModel, Field


class StaffLoginRequest(BaseModel):
    password: str = Field(..., min_length=1)
