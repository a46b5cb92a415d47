"""
Validation of completion-service replies.

The model's output is untrusted input: every field is type-checked and
resolved to a documented default, and a reply that cannot be read at all
becomes the fixed fallback evaluation instead of an exception.
"""
import json
import logging
import math
import re
from dataclasses import replace
from typing import Any, Optional

from .errors import ParseError
from .models import CommitEvaluation

logger = logging.getLogger(__name__)

SCORE_MIN = 1
SCORE_MAX = 10
SCORE_DEFAULT = 5

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def strip_fences(text: str) -> str:
    text = text.strip()
    text = _FENCE_OPEN.sub("", text)
    return _FENCE_CLOSE.sub("", text)


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but true/false is never a score
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def coerce_index(value: Any) -> int:
    if _is_number(value) and math.isfinite(value):
        return int(value)
    return 0


def coerce_score(value: Any) -> int:
    if not _is_number(value) or math.isnan(value):
        return SCORE_DEFAULT
    return int(round(max(SCORE_MIN, min(SCORE_MAX, value))))


def coerce_changes(value: Any) -> Optional[tuple[str, ...]]:
    if not isinstance(value, list) or not value:
        return None
    if not all(isinstance(x, str) for x in value):
        return None
    return tuple(value)


def coerce_entry(item: dict) -> CommitEvaluation:
    return CommitEvaluation(
        index=coerce_index(item.get("index")),
        good=_as_bool(item.get("good")) or False,
        score=coerce_score(item.get("score")),
        is_vague=_as_bool(item.get("isVague")),
        issue=_as_str(item.get("issue")),
        better=_as_str(item.get("better")),
        changes_summary=coerce_changes(item.get("changes")),
    )


def parse_evaluations_strict(raw: str) -> list[CommitEvaluation]:
    """Like parse_evaluations, but raise ParseError instead of returning None."""
    text = strip_fences(raw)
    try:
        data = json.loads(text)
    # ValueError covers JSONDecodeError and oversized integer literals
    except (ValueError, RecursionError) as e:
        raise ParseError(f"response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("response is not a JSON object")
    items = data.get("commits")
    if not isinstance(items, list):
        raise ParseError('response has no "commits" array')

    return [coerce_entry(item) for item in items if isinstance(item, dict)]


def parse_evaluations(raw: str, expected_count: int = 1) -> list[CommitEvaluation] | None:
    try:
        evaluations = parse_evaluations_strict(raw)
    except ParseError as e:
        logger.debug("could not parse evaluation (%s): %.200r", e, raw)
        return None

    if len(evaluations) != expected_count:
        logger.debug("expected %d evaluations, got %d", expected_count, len(evaluations))
    return evaluations


def evaluate_response(raw: str, index: int) -> CommitEvaluation:
    """Turn the reply to a single-commit request into exactly one evaluation.

    The first entry wins and extras are ignored. The caller's *index* always
    replaces whatever index the model reported.
    """
    evaluations = parse_evaluations(raw, expected_count=1)
    if not evaluations:
        return CommitEvaluation.fallback(index)
    return replace(evaluations[0], index=index)
