"""Custom exceptions for deck and infographic synthesis."""

from typing import Iterable, List, Optional


class StoryboardError(Exception):
    """Base class for all toolkit errors."""


class ConfigurationError(StoryboardError):
    """Raised when a required setting (the API key) is missing or invalid."""


class EmptyInputError(StoryboardError):
    """Raised before any network call when there is nothing to synthesize from."""


class GenerationServiceError(StoryboardError):
    """Raised when a call to the generation service fails in transport."""


class SynthesisFormatError(StoryboardError):
    """Raised when a generation response cannot be parsed as a deck object."""


class SynthesisSchemaError(StoryboardError):
    """Raised when a parsed response violates the slide schema."""

    def __init__(self, issues: Iterable[str], message: Optional[str] = None):
        self.issues: List[str] = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Response does not match the slide schema"]
        super().__init__(message or self._format())

    def _format(self) -> str:
        lines = ["Deck schema validation failed:"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)


class AttachmentError(StoryboardError):
    """Raised when an attachment payload cannot be decoded for upload."""


class ImageSynthesisError(StoryboardError):
    """Raised when the image response carries no inline image payload."""


class SessionBusyError(StoryboardError):
    """Raised when a generation is requested while another one is in flight."""
