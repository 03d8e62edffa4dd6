"""
Extraction of the correction array from free-text model replies.

The model is asked to reply with a bare JSON array but routinely wraps it
in prose or markdown fences. The heuristic here takes everything from the
first "[" to the last "]" in the reply and parses that span. It does not
attempt any JSON repair.
"""
import json
import re
from typing import Any, List, Optional

from pydantic import TypeAdapter

from app.schemas.correction import CorrectionResult

# Greedy on purpose: outermost "[" to outermost "]", newlines included
JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

_results_adapter = TypeAdapter(List[CorrectionResult])


def extract_json_array(text: str) -> Optional[str]:
    """
    Find the first greedy bracket-delimited span in text.

    Args:
        text: Raw reply text from the completion service

    Returns:
        The span from the first "[" to the last "]" inclusive,
        or None if the text has no such span
    """
    match = JSON_ARRAY_PATTERN.search(text)
    if match is None:
        return None
    return match.group(0)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_json_array(array_text: str) -> List[Any]:
    """
    Decode an extracted array span.

    NaN, Infinity and -Infinity are not JSON and are rejected, since
    they could not be sent back to the client.

    Raises:
        json.JSONDecodeError: If the span is not valid JSON
        ValueError: If the span contains a non-finite number constant
    """
    return json.loads(array_text, parse_constant=_reject_constant)


def validate_correction_results(results: List[Any]) -> List[CorrectionResult]:
    """
    Check decoded results against the CorrectionResult schema.

    Raises:
        pydantic.ValidationError: If any element is missing a field,
            has the wrong type, or has confidence outside 0.0-1.0
    """
    return _results_adapter.validate_python(results)
