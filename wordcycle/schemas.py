from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class WordResponse(BaseModel):
    """One dispensed vocabulary entry plus how many are left in the cycle."""

    success: bool = True
    remaining_unique: int = Field(..., ge=0, description="entries left before the cycle resets")
    data: Dict[str, Any] = Field(..., description="the vocabulary entry, verbatim")


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class ReloadResponse(BaseModel):
    success: bool = True
    count: int
