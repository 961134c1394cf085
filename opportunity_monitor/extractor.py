"""Extraction of candidate records from free-form agent text."""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from .errors import ExtractionError
from .models import LISTING_SHAPE, CandidateRecord, RecordShape

logger = logging.getLogger(__name__)

# ``` and ```json / ```JSON / ```javascript style fence markers
_FENCE_RE = re.compile(r"```[A-Za-z0-9_-]*")


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers, keeping their content."""
    return _FENCE_RE.sub("", text).strip()


def parse_payload(raw_text: str) -> Optional[List[Dict[str, Any]]]:
    """
    Isolate and parse the JSON array embedded in agent text.

    Everything before the first ``[`` and after the last ``]`` is ignored.
    The isolated slice must parse completely as an array of objects.

    Returns:
        The parsed objects, or None if the text holds no array at all.

    Raises:
        ExtractionError: If the isolated slice is not a valid array of objects.
    """
    text = strip_code_fences(raw_text or "")
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end == -1 or end < start:
        return None

    payload = text[start:end + 1]
    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized int literals and runaway nesting
        raise ExtractionError(f"Invalid JSON array: {e}") from e

    if not isinstance(data, list):
        raise ExtractionError(f"Expected a JSON array, got {type(data).__name__}")
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ExtractionError(
                f"Array element {index} is {type(item).__name__}, expected an object"
            )
    return data


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def to_candidate(item: Dict[str, Any], shape: RecordShape = LISTING_SHAPE) -> CandidateRecord:
    """Map one parsed object onto a CandidateRecord using the shape's keys."""
    return CandidateRecord(
        title=_as_text(item.get(shape.title_key)),
        deadline=_as_text(item.get(shape.deadline_key)) or "",
        reference=_as_text(item.get(shape.reference_key)) if shape.reference_key else None,
        description=_as_text(item.get(shape.description_key)) if shape.description_key else None,
    )


def extract_records(raw_text: str, shape: RecordShape = LISTING_SHAPE) -> List[CandidateRecord]:
    """
    Extract candidate records from agent text.

    Never raises: a missing payload yields an empty list, and a malformed
    payload yields an empty list plus a logged warning. Semantic checks
    (such as a missing title) are left to reconciliation.

    Args:
        raw_text: Text returned by the agent.
        shape: Payload layout to read each object with.

    Returns:
        List of CandidateRecord objects, in payload order.
    """
    try:
        items = parse_payload(raw_text)
    except ExtractionError as e:
        preview = (raw_text or "")[:200].replace("\n", " ")
        logger.warning(f"Could not parse agent payload: {e}. Text starts with: {preview!r}")
        return []

    if items is None:
        logger.debug("No JSON array found in agent text")
        return []
    if not items:
        logger.debug("Agent returned an empty array")
        return []

    return [to_candidate(item, shape) for item in items]
