"""
Pydantic schemas for API request/response models.
"""
from app.schemas.correction import (
    CorrectionRequest,
    CorrectionResult,
    CorrectionResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "CorrectionRequest",
    "CorrectionResult",
    "CorrectionResponse",
    "ErrorResponse",
    "HealthResponse",
]
