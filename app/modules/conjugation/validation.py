"""Parsing and validation of model-generated question lists.

Model output is untrusted: it is parsed as a JSON array and every element is
validated as a ``Question``. Elements that fail validation are dropped.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from app.core.logging import get_logger
from app.modules.conjugation.models import Question

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n(?P<body>.*?)\n?```\s*$", re.DOTALL)


class MalformedOutputError(ValueError):
    """Generated text is not a JSON array."""


def strip_code_fences(text: str) -> str:
    text = text.strip()
    m = _FENCE_RE.match(text)
    return m.group("body").strip() if m else text


def parse_generated_output(text: str) -> list[Any]:
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise MalformedOutputError(f"Output is not valid JSON: {e.msg}") from e
    if not isinstance(data, list):
        raise MalformedOutputError(
            f"Expected a JSON array, got {type(data).__name__}"
        )
    return data


def validate_questions(
    items: Iterable[Any], *, limit: Optional[int] = None
) -> list[Question]:
    """Keep the elements that validate as questions, in order, up to ``limit``."""
    out: list[Question] = []
    dropped = 0
    for idx, item in enumerate(items):
        if limit is not None and len(out) >= limit:
            break
        if isinstance(item, Question):
            out.append(item)
            continue
        try:
            out.append(Question.model_validate(item))
        except ValidationError as e:
            dropped += 1
            logger.debug("Dropping invalid question at %d: %s", idx, e.errors())
    if dropped:
        logger.warning("Dropped %d invalid question(s)", dropped)
    return out
