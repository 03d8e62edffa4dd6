"""
Pydantic schemas for grocery item correction.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class CorrectionRequest(BaseModel):
    """Request to correct a list of grocery items."""
    items: List[str] = Field(
        ...,
        description="Grocery item strings to correct, in display order"
    )
    database: Any = Field(
        default=None,
        description="Reference list of known grocery items; strings are inserted verbatim into the prompt"
    )


class CorrectionResult(BaseModel):
    """One corrected item as returned by the model."""
    original: str = Field(description="Item text as submitted")
    corrected: str = Field(description="Most likely correct item name")
    confidence: float = Field(ge=0.0, le=1.0, description="Model confidence (0.0-1.0)")
    suggestions: List[str] = Field(description="Alternative corrections, best first")


class CorrectionResponse(BaseModel):
    """Successful correction response."""
    results: List[CorrectionResult] = Field(description="One entry per corrected item")


class ErrorResponse(BaseModel):
    """Error body returned by the correction endpoint."""
    error: str = Field(description="Short error description")
    details: Optional[str] = Field(None, description="Raw upstream error body")
    response: Optional[str] = Field(None, description="Raw upstream reply text")
    message: Optional[str] = Field(None, description="Internal fault message")


class HealthResponse(BaseModel):
    """Liveness check response."""
    status: str = Field(description="Service status")
    correction_provider: str = Field(description="Configured correction provider")
    configured: bool = Field(description="Whether the provider has its required settings")
    timestamp: str = Field(description="ISO 8601 timestamp")
