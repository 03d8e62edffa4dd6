"""
Prompt template for grocery item correction.
"""
import json
from typing import Any, List


GROCERY_CORRECTION_PROMPT = """Correct these misspelled grocery items. They may contain spelling errors, phonetic errors, and Hinglish (Hindi-English mix).

Items to correct:
{item_lines}

Common grocery items for reference: {database}

Return ONLY a JSON array with this exact format:
[
  {{
    "original": "bred",
    "corrected": "Bread",
    "confidence": 0.95,
    "suggestions": ["Bread", "Bread Slices", "Brown Bread"]
  }}
]

Rules:
- corrected: the most likely correct item name
- confidence: 0.0 to 1.0 (how confident you are in the correction)
- suggestions: array of 3 alternative corrections (best first, including the corrected one)
- For brand names, preserve exact spelling (e.g., "Cinthol" not "Dettol")
- Return ONLY valid JSON, no markdown, no explanation"""


def format_item_lines(items: List[str]) -> str:
    """Render items as a 1-indexed, quoted list, one per line."""
    return "\n".join(f'{i}. "{item}"' for i, item in enumerate(items, start=1))


def format_reference(database: Any) -> str:
    """
    Render the reference value as prompt text.

    Empty values (None, "", 0, false, empty lists) render as "". Strings
    are kept verbatim, lists are joined with ", " and objects are
    written as JSON.
    """
    if not database:
        return ""
    if isinstance(database, str):
        return database
    if isinstance(database, bool):
        return "true"
    if isinstance(database, list):
        return ", ".join(format_reference(entry) for entry in database)
    if isinstance(database, dict):
        return json.dumps(database, ensure_ascii=False)
    return str(database)


def build_prompt(items: List[str], database: Any = None) -> str:
    """
    Build the correction prompt sent to the completion service.

    Args:
        items: Grocery item strings to correct
        database: Reference item list; any JSON value, rendered by format_reference

    Returns:
        Complete prompt text
    """
    return GROCERY_CORRECTION_PROMPT.format(
        item_lines=format_item_lines(items),
        database=format_reference(database)
    )
