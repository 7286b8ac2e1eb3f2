"""
Synthesis Result Acceptor

The single point where raw generation output becomes a trusted Deck.
The service was asked for schema-conforming JSON but nothing here assumes
it complied: every response is parsed and fully validated, and either a
complete Deck comes back or a typed error is raised.
"""

import json
import logging
import re
from collections import Counter
from typing import Any, List

from pydantic import ValidationError

from .errors import SynthesisFormatError, SynthesisSchemaError
from .schema import Deck

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\s*\n")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a single surrounding markdown code fence, if present."""
    t = text.strip()
    if t.startswith("```"):
        t = _FENCE_OPEN.sub("", t)
        t = _FENCE_CLOSE.sub("", t).strip()
    return t


def _format_issues(exc: ValidationError) -> List[str]:
    issues = []
    for error in exc.errors():
        loc = " -> ".join(str(p) for p in error["loc"]) if error["loc"] else "(root)"
        issues.append(f"{loc}: {error['msg']}")
    return issues


def parse_response(raw_text: str) -> Any:
    """Parse raw response text into a JSON object, or raise SynthesisFormatError."""
    if raw_text is None or not raw_text.strip():
        raise SynthesisFormatError("No response generated")
    try:
        data = json.loads(strip_code_fences(raw_text))
    except json.JSONDecodeError as exc:
        raise SynthesisFormatError(f"Response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SynthesisFormatError(
            f"Expected a JSON object at the top level, got {type(data).__name__}"
        )
    return data


def validate_deck(data: Any) -> Deck:
    """Validate parsed data against the slide schema."""
    if not isinstance(data, dict):
        raise SynthesisSchemaError([f"(root): expected an object, got {type(data).__name__}"])
    if "slides" not in data:
        raise SynthesisSchemaError(["slides: field required"])
    try:
        deck = Deck.model_validate(data)
    except ValidationError as exc:
        raise SynthesisSchemaError(_format_issues(exc)) from exc

    duplicates = [i for i, n in Counter(s.id for s in deck.slides).items() if n > 1]
    if duplicates:
        logger.warning("Deck has duplicate slide ids: %s", ", ".join(duplicates))
    return deck


def accept_deck(raw_text: str) -> Deck:
    """Turn a generation response into a Deck.

    Raises:
        SynthesisFormatError: the text is empty or not a JSON object
        SynthesisSchemaError: the object violates the slide schema
    """
    deck = validate_deck(parse_response(raw_text))
    logger.info("Accepted deck %r with %d slides", deck.title, len(deck.slides))
    return deck
