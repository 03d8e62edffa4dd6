"""
API route for grocery item correction.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.config import settings
from app.schemas.correction import CorrectionRequest, CorrectionResponse, ErrorResponse
from app.services.correction_base import (
    ConfigurationError,
    CorrectionError,
    CorrectionService,
    InternalFaultError,
    InvalidRequestError,
)
from app.utils.logger import get_logger


logger = get_logger("routes.correction")
router = APIRouter()

CORRECTION_PATH = "/api/correct"
# Path used by existing browser clients
LEGACY_CORRECTION_PATH = "/api/claude"


def get_correction_service(request: Request) -> CorrectionService:
    """
    Dependency to get the correction service from app state.

    Args:
        request: FastAPI request object

    Returns:
        CorrectionService instance

    Raises:
        ConfigurationError: If the service could not be created at startup
    """
    service = getattr(request.app.state, "correction_service", None)
    if service is None:
        raise ConfigurationError()
    return service


async def parse_correction_request(request: Request) -> CorrectionRequest:
    """
    Read and validate the JSON request body.

    Raises:
        InvalidRequestError: If the body is not JSON, not an object, or has
            no items array of strings
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidRequestError()

    if not isinstance(body, dict):
        raise InvalidRequestError()

    try:
        return CorrectionRequest.model_validate(body)
    except ValidationError as e:
        logger.info("Rejected correction request", error_count=e.error_count())
        raise InvalidRequestError()


@router.post(
    CORRECTION_PATH,
    response_model=CorrectionResponse,
    summary="Correct grocery items",
    description="Send misspelled grocery items to the completion service and return structured corrections",
    responses={
        200: {"description": "Corrections returned by the model"},
        400: {"model": ErrorResponse, "description": "Missing or invalid items array"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        500: {"model": ErrorResponse, "description": "Missing API key, unparseable reply or internal fault"},
    }
)
@router.post(LEGACY_CORRECTION_PATH, include_in_schema=False)
async def correct_items(
    request: Request,
    service: CorrectionService = Depends(get_correction_service)
) -> JSONResponse:
    """
    Correct a list of grocery items.

    The parsed result array is returned verbatim under "results". Any
    failure is returned as a JSON error body; upstream failures keep the
    upstream status code.
    """
    correction_request = await parse_correction_request(request)

    try:
        results = await service.correct(
            correction_request.items,
            correction_request.database
        )
        # Rendering happens here so serialization faults are converted too
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"results": results},
            headers=settings.cors_headers
        )
    except CorrectionError:
        raise
    except Exception as e:
        logger.error(
            "Correction request failed",
            provider=service.get_provider_name(),
            error=str(e),
            exc_info=True
        )
        raise InternalFaultError(str(e)) from e


@router.options(CORRECTION_PATH, include_in_schema=False)
@router.options(LEGACY_CORRECTION_PATH, include_in_schema=False)
async def correct_items_preflight() -> Response:
    """CORS preflight: empty 200 response."""
    return Response(status_code=status.HTTP_200_OK, headers=settings.cors_headers)
