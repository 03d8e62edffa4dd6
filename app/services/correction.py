"""
Correction service factory and provider registry.
"""
from typing import List, Optional

from app.config import CORRECTION_PROVIDERS, Settings, settings as default_settings
from app.services.correction_base import CorrectionService
from app.utils.logger import get_logger


logger = get_logger("services.correction_factory")


def get_missing_settings_for_provider(
    provider: str,
    settings: Optional[Settings] = None
) -> List[str]:
    """
    List required settings that are unset for a provider.

    Raises:
        ValueError: If provider is not supported
    """
    settings = settings or default_settings
    if provider not in CORRECTION_PROVIDERS:
        raise ValueError(
            f"Unsupported correction provider: {provider}. "
            f"Supported providers: {', '.join(CORRECTION_PROVIDERS)}"
        )
    return [
        name
        for name in CORRECTION_PROVIDERS[provider]["required_settings"]
        if not getattr(settings, name, None)
    ]


def is_provider_configured(provider: str, settings: Optional[Settings] = None) -> bool:
    """Return True if provider is known and has all its required settings."""
    try:
        return not get_missing_settings_for_provider(provider, settings)
    except ValueError:
        return False


def create_correction_service(
    provider: Optional[str] = None,
    settings: Optional[Settings] = None
) -> CorrectionService:
    """
    Factory function to create the correction service for a provider.

    Args:
        provider: Provider name ("anthropic", "noop"). If None, uses settings.CORRECTION_PROVIDER
        settings: Settings to configure the service from. If None, uses the global settings

    Returns:
        CorrectionService instance for the specified provider

    Raises:
        ValueError: If provider is not supported
        ConfigurationError: If a required setting (e.g. the API key) is missing
    """
    settings = settings or default_settings
    if provider is None:
        provider = settings.CORRECTION_PROVIDER

    provider = provider.lower()

    if provider == "anthropic":
        from app.services.correction_anthropic import AnthropicCorrectionService
        logger.info(f"Creating Anthropic correction service with model: {settings.ANTHROPIC_MODEL}")
        return AnthropicCorrectionService.from_settings(settings)
    elif provider == "noop":
        from app.services.correction_noop import NoOpCorrectionService
        logger.info("Creating NoOp correction service")
        return NoOpCorrectionService(
            reply_text=settings.NOOP_REPLY_TEXT,
            validate_results=settings.VALIDATE_RESULTS
        )
    else:
        raise ValueError(
            f"Unsupported correction provider: {provider}. "
            f"Supported providers: {', '.join(CORRECTION_PROVIDERS)}"
        )


__all__ = [
    "create_correction_service",
    "get_missing_settings_for_provider",
    "is_provider_configured",
    "CorrectionService",
]
