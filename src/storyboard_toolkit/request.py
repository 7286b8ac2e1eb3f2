"""
Synthesis Request Builder

Composes generation requests from user inputs. Building a request has no
side effects; sending it is the generation service's job.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .config import SynthesisConfig
from .prompts import (
    CONSULTANT_SYSTEM_INSTRUCTION,
    deck_task_prompt,
    infographic_brief_prompt,
)
from .schema import FileInput, deck_response_schema

JSON_MIME_TYPE = "application/json"


@dataclass(frozen=True)
class SynthesisRequest:
    """One request to the generation service.

    `response_schema` and `response_mime_type` are set only for structured
    requests; a free-text request leaves both as None.
    """
    prompt: str
    attachments: List[FileInput] = field(default_factory=list)
    system_instruction: Optional[str] = None
    response_schema: Optional[Dict[str, Any]] = None
    response_mime_type: Optional[str] = None
    temperature: Optional[float] = None

    @property
    def is_structured(self) -> bool:
        return self.response_schema is not None


def build_deck_request(
    files: Sequence[FileInput],
    objective: str,
    config: Optional[SynthesisConfig] = None,
) -> SynthesisRequest:
    """Build the schema-constrained deck request.

    Args:
        files: Attachments, forwarded in order as inline content
        objective: Free-text user objective
        config: Settings supplying the sampling temperature

    Returns:
        A structured SynthesisRequest bound to the deck response schema
    """
    config = config or SynthesisConfig()
    return SynthesisRequest(
        prompt=deck_task_prompt(objective.strip()),
        attachments=list(files),
        system_instruction=CONSULTANT_SYSTEM_INSTRUCTION,
        response_schema=deck_response_schema(),
        response_mime_type=JSON_MIME_TYPE,
        temperature=config.temperature,
    )


def build_brief_request(files: Sequence[FileInput], objective: str) -> SynthesisRequest:
    """Build the free-text request for an infographic visual brief."""
    return SynthesisRequest(
        prompt=infographic_brief_prompt(objective.strip()),
        attachments=list(files),
    )
