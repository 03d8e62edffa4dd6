"""
Abstract base class and error types for grocery correction services.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.services.correction_parsing import (
    decode_json_array,
    extract_json_array,
    validate_correction_results,
)
from app.services.correction_prompt import build_prompt
from app.utils.logger import get_logger

logger = get_logger("services.correction_base")


class CorrectionError(Exception):
    """
    Base exception for correction failures that map to an HTTP response.

    Attributes:
        message: Value of the "error" field in the response body
        status_code: HTTP status returned to the caller
        extra: Additional fields merged into the response body
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        extra: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.extra = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class InvalidRequestError(CorrectionError):
    """Request body is not an object with an items array of strings."""

    def __init__(self, message: str = "Invalid request: items array required"):
        super().__init__(message, status_code=400)


class ConfigurationError(CorrectionError):
    """A provider setting required to reach the completion service is missing."""

    def __init__(self, message: str = "API key not configured"):
        super().__init__(message, status_code=500)


class UpstreamError(CorrectionError):
    """Completion service answered with a non-success status."""

    def __init__(self, status_code: int, details: str):
        super().__init__("API call failed", status_code=status_code, extra={"details": details})
        self.details = details


class MalformedUpstreamReplyError(CorrectionError):
    """Completion service reply holds no usable JSON array."""

    def __init__(self, response_text: str):
        super().__init__("No valid JSON in response", status_code=500, extra={"response": response_text})
        self.response_text = response_text


class InternalFaultError(CorrectionError):
    """Any other failure while handling a correction request."""

    def __init__(self, message: str):
        super().__init__("Internal server error", status_code=500, extra={"message": message})


class CorrectionService(ABC):
    """
    Abstract base class for correction service implementations.

    Subclasses only talk to a completion service; prompt construction and
    reply parsing are shared here.
    """

    validate_results: bool = False

    async def correct(self, items: List[str], database: Any = None) -> List[Any]:
        """
        Correct grocery items through the completion service.

        Args:
            items: Grocery item strings to correct
            database: Reference item list for the prompt (any JSON value)

        Returns:
            Decoded correction array, passed through unchanged

        Raises:
            UpstreamError: If the completion service call fails
            MalformedUpstreamReplyError: If the reply has no JSON array, or
                validate_results is set and the array does not match the schema
            json.JSONDecodeError: If the extracted array is not valid JSON
            ValueError: If the extracted array contains NaN or Infinity
        """
        prompt = build_prompt(items, database)
        reply_text = await self.complete(prompt)

        array_text = extract_json_array(reply_text)
        if array_text is None:
            logger.warning(
                "No JSON array in completion reply",
                provider=self.get_provider_name(),
                reply_preview=reply_text[:200]
            )
            raise MalformedUpstreamReplyError(reply_text)

        results = decode_json_array(array_text)

        if self.validate_results:
            try:
                validate_correction_results(results)
            except ValidationError as e:
                logger.warning(
                    "Completion reply does not match correction schema",
                    provider=self.get_provider_name(),
                    error_count=e.error_count()
                )
                raise MalformedUpstreamReplyError(reply_text) from e

        logger.info(
            "Correction completed",
            provider=self.get_provider_name(),
            item_count=len(items),
            result_count=len(results)
        )
        return results

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """
        Send a prompt to the completion service.

        Args:
            prompt: Complete prompt text, sent as a single user message

        Returns:
            Text of the first content block of the reply

        Raises:
            UpstreamError: If the service answers with a non-success status
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the model name used by this service.

        Returns:
            Model name string (e.g., "anthropic-claude-sonnet-4-20250514")
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """
        Get the provider name for this service.

        Returns:
            Provider name string (e.g., "anthropic", "noop")
        """
        pass
