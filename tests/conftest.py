"""
Pytest configuration and fixtures for correction proxy tests.
"""
import json
import os
from typing import AsyncGenerator, Callable, Optional

import pytest
from httpx import AsyncClient, ASGITransport

# Tests must never reach the real completion service; set before importing Settings
os.environ.pop("ANTHROPIC_API_KEY", None)
os.environ["CORRECTION_PROVIDER"] = "noop"
os.environ["CORS_ORIGINS"] = "*"

from app.main import app
from app.services.correction_noop import NoOpCorrectionService


BRED_RESULTS = [
    {
        "original": "bred",
        "corrected": "Bread",
        "confidence": 0.95,
        "suggestions": ["Bread", "Bread Slices", "Brown Bread"]
    },
    {
        "original": "Amul Butr",
        "corrected": "Amul Butter",
        "confidence": 0.9,
        "suggestions": ["Amul Butter", "Butter", "Amul Fresh Butter"]
    }
]


@pytest.fixture
def bred_results() -> list:
    """Two-element correction array for the bred / Amul Butr example."""
    return [dict(entry) for entry in BRED_RESULTS]


@pytest.fixture
def reply_with_array() -> Callable[[list], str]:
    """Factory fixture wrapping a result array in model-style prose."""

    def _create_reply(results: list, prefix: str = "Here are the corrected items:\n\n") -> str:
        return f"{prefix}{json.dumps(results, indent=2)}\n\nLet me know if you need anything else."

    return _create_reply


@pytest.fixture
def install_service():
    """
    Install a correction service on app state for the duration of a test.

    ASGITransport does not run the lifespan, so state is set directly.
    """

    def _install(service: Optional[NoOpCorrectionService]):
        app.state.correction_service = service
        return service

    yield _install
    app.state.correction_service = None


@pytest.fixture
def stub_service(install_service) -> Callable[[Optional[str]], NoOpCorrectionService]:
    """Factory fixture installing a NoOp service with a canned reply."""

    def _create(reply_text: Optional[str] = None, validate_results: bool = False) -> NoOpCorrectionService:
        return install_service(
            NoOpCorrectionService(reply_text=reply_text, validate_results=validate_results)
        )

    return _create


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the FastAPI application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
