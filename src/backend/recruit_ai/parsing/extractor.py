"""Pull the JSON payload out of free-form LLM output."""

import json
import logging
from typing import Any

from recruit_ai.core.errors import PayloadDecodeError, PayloadNotFoundError

logger = logging.getLogger(__name__)


def extract_payload(raw: str) -> dict[str, Any]:
    """Decode the span between the first ``{`` and the last ``}`` in ``raw``.

    Tolerates prose or markdown fences around the payload. Several separate
    objects in one response end up in a single span and fail to decode.
    Returns the decoded object without checking its shape.
    """
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        logger.error("No JSON found in AI response: %s", raw[:500])
        raise PayloadNotFoundError("No JSON found in AI response")

    try:
        return json.loads(raw[start : end + 1])
    except json.JSONDecodeError as exc:
        logger.error("LLM returned invalid JSON: %s", raw[:500])
        raise PayloadDecodeError(f"Failed to parse AI response: {exc}") from exc
