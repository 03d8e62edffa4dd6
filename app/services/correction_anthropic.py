"""
Anthropic Messages API correction service implementation.
"""
import time
from typing import Any, Dict, Optional

import httpx

from app.config import Settings
from app.services.correction_base import (
    ConfigurationError,
    CorrectionService,
    UpstreamError,
)
from app.utils.logger import get_logger

logger = get_logger("services.correction_anthropic")


class AnthropicCorrectionService(CorrectionService):
    """Service for correcting grocery items using Anthropic's Messages API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        api_url: str,
        api_version: str,
        max_tokens: int,
        timeout: float,
        validate_results: bool = False
    ):
        """
        Initialize Anthropic correction service.

        All values are injected by the caller; use from_settings() to build
        the service from application settings.

        Args:
            api_key: Anthropic API key
            model: Model identifier
            api_url: Messages endpoint URL
            api_version: anthropic-version header value
            max_tokens: Output token budget
            timeout: Transport timeout in seconds
            validate_results: Schema-check parsed results

        Raises:
            ConfigurationError: If api_key is empty
        """
        if not api_key:
            raise ConfigurationError()

        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.api_version = api_version
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.validate_results = validate_results

        logger.info(
            "AnthropicCorrectionService initialized",
            model=self.model,
            max_tokens=self.max_tokens,
            timeout=self.timeout
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnthropicCorrectionService":
        """Build the service from the ANTHROPIC_* settings."""
        return cls(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.ANTHROPIC_MODEL,
            api_url=settings.ANTHROPIC_API_URL,
            api_version=settings.ANTHROPIC_VERSION,
            max_tokens=settings.ANTHROPIC_MAX_TOKENS,
            timeout=settings.ANTHROPIC_TIMEOUT_SECONDS,
            validate_results=settings.VALIDATE_RESULTS
        )

    def get_model_name(self) -> str:
        """Return model name in format: anthropic-{model}"""
        return f"anthropic-{self.model}"

    def get_provider_name(self) -> str:
        """Return provider name."""
        return "anthropic"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        }

    async def complete(self, prompt: str) -> str:
        """
        Call the Messages API once with the prompt as a single user message.

        Args:
            prompt: Complete prompt text

        Returns:
            Text of the first content block of the reply

        Raises:
            UpstreamError: If the API answers with a non-2xx status
            httpx.HTTPError: On transport failures, including timeouts
            KeyError, IndexError: If a 2xx reply has no text content block
        """
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    json=self._build_payload(prompt),
                    headers=self._build_headers()
                )
        except httpx.TimeoutException:
            logger.error(f"Anthropic request timed out after {self.timeout}s")
            raise
        except httpx.HTTPError as e:
            logger.error(f"Anthropic request failed: {str(e)}", exc_info=True)
            raise

        elapsed = time.time() - start_time

        if not response.is_success:
            error_body = response.text
            logger.error(
                "Anthropic API error",
                status_code=response.status_code,
                duration_s=f"{elapsed:.2f}",
                error_body=error_body[:500]
            )
            raise UpstreamError(response.status_code, error_body)

        data = response.json()
        reply_text = data["content"][0]["text"]

        usage = data.get("usage", {})
        logger.info(
            "Anthropic completion received",
            model=data.get("model", self.model),
            duration_s=f"{elapsed:.2f}",
            input_tokens=usage.get("input_tokens"),
            output_tokens=usage.get("output_tokens"),
            stop_reason=data.get("stop_reason")
        )
        logger.debug(f"Raw Anthropic reply: {reply_text[:200]}...")

        return reply_text
