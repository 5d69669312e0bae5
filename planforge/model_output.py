"""
Model Output Parsing
Turn an LLM reply into JSON without guessing at structure the model never produced.
"""
import json
import logging
import re
from typing import Any

from .errors import MalformedModelOutput

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r'^```(?:json)?\s*', re.IGNORECASE)
_TRAILING_FENCE = re.compile(r'\s*```$')


def strip_code_fence(text: str) -> str:
    """Remove a leading ```json / ``` marker and a trailing ``` marker"""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub('', cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub('', cleaned, count=1)
    return cleaned.strip()


def parse_model_json(text: str) -> Any:
    """
    Parse a model reply as JSON.

    The reply is parsed strictly first. If that fails, markdown code-fence
    markers and surrounding whitespace are stripped and the parse is retried
    once. Nothing else is repaired.

    Raises:
        MalformedModelOutput: both attempts failed; carries the raw text
    """
    if text is None:
        raise MalformedModelOutput('', "empty response")

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Strict JSON parse failed ({e}), retrying without code fences")

    cleaned = strip_code_fence(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Model output is not valid JSON: {e}")
        logger.debug(f"Raw model output:\n{text}")
        raise MalformedModelOutput(text, str(e))
