"""
Infographic Pipeline

Two explicit stages over the generation service:

1. BriefStage: attachments + objective -> a natural-language visual brief
2. ImageStage: brief -> one rendered 16:9 image

The image request is only built from a finished brief. An empty brief
falls back to FALLBACK_BRIEF; a response with no image is a hard failure.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, Tuple, Union

from .config import DEFAULT_ASPECT_RATIO
from .errors import ImageSynthesisError
from .prompts import FALLBACK_BRIEF
from .request import build_brief_request
from .schema import FileInput
from .service import ContentPart, GenerationService

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/png"
DEFAULT_INFOGRAPHIC_FILENAME = "infographic.png"


@dataclass(frozen=True)
class InfographicResult:
    """The rendered image plus the brief it was drawn from."""
    brief: str
    data_uri: str
    mime_type: str

    @property
    def image_bytes(self) -> bytes:
        _, _, payload = self.data_uri.partition(",")
        return base64.b64decode(payload, validate=True)


def extract_image_data_uri(parts: Iterable[ContentPart]) -> Tuple[str, str]:
    """Return (data_uri, mime_type) for the first inline image part.

    Raises:
        ImageSynthesisError: when no part carries image data
    """
    for part in parts:
        if part.has_image:
            mime_type = part.mime_type or DEFAULT_IMAGE_MIME
            encoded = base64.b64encode(part.inline_data).decode("ascii")
            return f"data:{mime_type};base64,{encoded}", mime_type
    raise ImageSynthesisError("Failed to generate infographic image.")


class BriefStage:
    """Stage one: synthesize the visual brief."""

    def __init__(self, service: GenerationService) -> None:
        self.service = service

    def run(self, files: Sequence[FileInput], objective: str) -> str:
        brief = self.service.synthesize_text(build_brief_request(files, objective))
        brief = (brief or "").strip()
        if not brief:
            logger.warning("Brief synthesis returned nothing; using the fallback brief")
            return FALLBACK_BRIEF
        logger.info("Generated image prompt: %s", brief)
        return brief


class ImageStage:
    """Stage two: render the brief as one image."""

    def __init__(self, service: GenerationService, aspect_ratio: str = DEFAULT_ASPECT_RATIO) -> None:
        self.service = service
        self.aspect_ratio = aspect_ratio

    def run(self, brief: str) -> InfographicResult:
        parts = self.service.synthesize_image(brief, self.aspect_ratio)
        data_uri, mime_type = extract_image_data_uri(parts)
        return InfographicResult(brief=brief, data_uri=data_uri, mime_type=mime_type)


class InfographicPipeline:
    """Brief then image, strictly in that order."""

    def __init__(self, service: GenerationService, aspect_ratio: str = DEFAULT_ASPECT_RATIO) -> None:
        self.brief_stage = BriefStage(service)
        self.image_stage = ImageStage(service, aspect_ratio=aspect_ratio)

    def run(self, files: Sequence[FileInput], objective: str) -> InfographicResult:
        brief = self.brief_stage.run(files, objective)
        return self.image_stage.run(brief)


def save_infographic(result: InfographicResult, path: Union[str, Path]) -> Path:
    """Write the decoded image to disk and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        payload = result.image_bytes
    except binascii.Error as exc:
        raise ImageSynthesisError(f"Infographic payload is not valid base64: {exc}") from exc
    path.write_bytes(payload)
    return path
