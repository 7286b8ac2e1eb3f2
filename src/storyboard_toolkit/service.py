"""
Generation Service

The three operation shapes the toolkit consumes from a text/image
generation backend, and the Gemini implementation of them built on the
google-genai SDK.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .config import SynthesisConfig
from .errors import GenerationServiceError
from .request import SynthesisRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentPart:
    """One part of an image-generation response."""
    text: Optional[str] = None
    inline_data: Optional[bytes] = None
    mime_type: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return bool(self.inline_data)


class GenerationService(Protocol):
    """Backend contract. Every failure must raise; none may return silently empty,
    except free text, where an empty string is a legitimate answer."""

    def synthesize_structured(self, request: SynthesisRequest) -> str:
        ...

    def synthesize_text(self, request: SynthesisRequest) -> str:
        ...

    def synthesize_image(self, prompt: str, aspect_ratio: str) -> List[ContentPart]:
        ...


class GeminiService:
    """GenerationService backed by the Gemini API.

    The client is created on first use, so a missing API key surfaces as a
    ConfigurationError at the first call rather than at construction.
    """

    def __init__(self, config: SynthesisConfig, client: Optional[genai.Client] = None) -> None:
        self.config = config
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.config.require_api_key())
        return self._client

    @staticmethod
    def _contents(request: SynthesisRequest) -> List[types.Content]:
        parts = [
            types.Part.from_bytes(data=f.raw_bytes, mime_type=f.mime_type)
            for f in request.attachments
        ]
        parts.append(types.Part.from_text(text=request.prompt))
        return [types.Content(role="user", parts=parts)]

    def _generate(self, model: str, contents, config: Optional[types.GenerateContentConfig]):
        client = self.client
        try:
            return client.models.generate_content(model=model, contents=contents, config=config)
        except genai_errors.APIError as exc:
            logger.error("Gemini API error (%s): %s", model, exc)
            raise GenerationServiceError(f"Generation request to {model} failed: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.error("Transport error calling %s: %s", model, exc)
            raise GenerationServiceError(f"Could not reach {model}: {exc}") from exc

    def synthesize_structured(self, request: SynthesisRequest) -> str:
        config = types.GenerateContentConfig(
            system_instruction=request.system_instruction,
            temperature=request.temperature,
            response_mime_type=request.response_mime_type,
            response_schema=request.response_schema,
        )
        logger.debug("Structured request with %d attachments", len(request.attachments))
        response = self._generate(self.config.text_model, self._contents(request), config)
        return response.text or ""

    def synthesize_text(self, request: SynthesisRequest) -> str:
        config = None
        if request.system_instruction or request.temperature is not None:
            config = types.GenerateContentConfig(
                system_instruction=request.system_instruction,
                temperature=request.temperature,
            )
        response = self._generate(self.config.text_model, self._contents(request), config)
        return response.text or ""

    def synthesize_image(self, prompt: str, aspect_ratio: str) -> List[ContentPart]:
        config = types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
        )
        contents = [types.Content(role="user", parts=[types.Part.from_text(text=prompt)])]
        response = self._generate(self.config.image_model, contents, config)

        parts: List[ContentPart] = []
        for candidate in response.candidates or []:
            if candidate.content is None:
                continue
            for part in candidate.content.parts or []:
                blob = part.inline_data
                parts.append(ContentPart(
                    text=part.text,
                    inline_data=blob.data if blob is not None else None,
                    mime_type=blob.mime_type if blob is not None else None,
                ))
        return parts
