"""
NoOp correction service for testing.
Returns a canned reply without calling any completion service.
"""
import json
import re
from typing import Optional

from app.services.correction_base import CorrectionService
from app.utils.logger import get_logger


logger = get_logger("services.correction_noop")

ITEM_LINE = re.compile(r'^\d+\. "(.*)"$', re.MULTILINE)


class NoOpCorrectionService(CorrectionService):
    """
    No-operation correction service for testing.

    With reply_text set, every call returns that text. Otherwise the reply
    echoes each prompt item back as its own correction with confidence 1.0,
    wrapped in a sentence so the array extraction path is still exercised.
    """

    def __init__(
        self,
        reply_text: Optional[str] = None,
        model_name: str = "noop-test-model",
        validate_results: bool = False
    ):
        self.reply_text = reply_text
        self.model_name = model_name
        self.validate_results = validate_results
        logger.info(f"NoOpCorrectionService initialized with model={model_name}")

    def get_model_name(self) -> str:
        """Return the configured model name."""
        return self.model_name

    def get_provider_name(self) -> str:
        """Return provider name."""
        return "noop"

    async def complete(self, prompt: str) -> str:
        logger.info(f"NoOp completion called, prompt_length={len(prompt)}")

        if self.reply_text is not None:
            return self.reply_text

        results = [
            {
                "original": item,
                "corrected": item,
                "confidence": 1.0,
                "suggestions": [item, item, item]
            }
            for item in ITEM_LINE.findall(prompt)
        ]
        return f"Here are the corrections: {json.dumps(results)}"
