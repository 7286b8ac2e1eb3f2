"""
Synthesis Session

Orchestrates one interactive session: pre-flight input checks, a single
in-flight generation, and conversion of failures to user-facing messages.

States: IDLE -> BUSY -> COMPLETE | ERROR, and back to IDLE on reset().
"""

import logging
from enum import Enum
from typing import Optional, Sequence, Union

from .acceptor import accept_deck
from .config import SynthesisConfig
from .errors import (
    ConfigurationError,
    EmptyInputError,
    SessionBusyError,
    StoryboardError,
)
from .infographic import InfographicPipeline, InfographicResult
from .navigator import DeckNavigator
from .request import build_deck_request
from .schema import Deck, FileInput
from .service import GenerationService

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please provide files or a detailed prompt to start."
DECK_FAILURE_MESSAGE = "Failed to generate deck. Please check your inputs and try again."
INFOGRAPHIC_FAILURE_MESSAGE = "Failed to generate infographic image."


class SessionStatus(str, Enum):
    IDLE = "IDLE"
    BUSY = "BUSY"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


class GenerationMode(str, Enum):
    DECK = "DECK"
    INFOGRAPHIC = "INFOGRAPHIC"


class SynthesisSession:
    """One user's session with at most one generation in flight."""

    def __init__(
        self,
        service: GenerationService,
        config: Optional[SynthesisConfig] = None,
        mode: GenerationMode = GenerationMode.DECK,
    ) -> None:
        self.service = service
        self.config = config or SynthesisConfig()
        self.mode = mode
        self.status = SessionStatus.IDLE
        self.error_message: Optional[str] = None
        self.last_error: Optional[Exception] = None
        self.deck: Optional[Deck] = None
        self.infographic: Optional[InfographicResult] = None
        self.navigator: Optional[DeckNavigator] = None

    @property
    def is_busy(self) -> bool:
        return self.status == SessionStatus.BUSY

    def check_inputs(self, files: Sequence[FileInput], objective: str) -> None:
        """Raise EmptyInputError when there are no files and the objective is too short."""
        if not files and len(objective.strip()) < self.config.min_objective_chars:
            raise EmptyInputError(EMPTY_INPUT_MESSAGE)

    def _failure_message(self) -> str:
        if self.mode == GenerationMode.INFOGRAPHIC:
            return INFOGRAPHIC_FAILURE_MESSAGE
        return DECK_FAILURE_MESSAGE

    def _run(self, files: Sequence[FileInput], objective: str) -> Union[Deck, InfographicResult]:
        if self.mode == GenerationMode.DECK:
            request = build_deck_request(files, objective, self.config)
            deck = accept_deck(self.service.synthesize_structured(request))
            self.deck = deck
            self.navigator = DeckNavigator(deck)
            return deck

        pipeline = InfographicPipeline(self.service, aspect_ratio=self.config.aspect_ratio)
        self.infographic = pipeline.run(files, objective)
        return self.infographic

    def generate(
        self,
        files: Sequence[FileInput],
        objective: str,
    ) -> Optional[Union[Deck, InfographicResult]]:
        """Run one generation in the current mode.

        Returns the Deck or InfographicResult, or None on failure, in which
        case `error_message` holds the text to show the user.

        Raises:
            SessionBusyError: if a generation is already in flight
        """
        if self.is_busy:
            raise SessionBusyError("A generation is already in progress")

        try:
            self.check_inputs(files, objective)
        except EmptyInputError as exc:
            self.error_message = str(exc)
            self.last_error = exc
            return None

        self.error_message = None
        self.last_error = None
        self.deck = None
        self.infographic = None
        self.navigator = None
        self.status = SessionStatus.BUSY
        logger.info("Generating %s from %d attachments", self.mode.value.lower(), len(files))

        try:
            result = self._run(files, objective)
        except ConfigurationError as exc:
            logger.error("Configuration error: %s", exc)
            self._fail(exc, str(exc))
            return None
        except StoryboardError as exc:
            logger.error("Generation failed: %s", exc)
            self._fail(exc, self._failure_message())
            return None
        except Exception as exc:
            self._fail(exc, self._failure_message())
            raise

        self.status = SessionStatus.COMPLETE
        return result

    def _fail(self, exc: Exception, message: str) -> None:
        self.last_error = exc
        self.error_message = message
        self.status = SessionStatus.ERROR

    def reset(self) -> None:
        """Return to IDLE and drop any result."""
        self.status = SessionStatus.IDLE
        self.error_message = None
        self.last_error = None
        self.deck = None
        self.infographic = None
        self.navigator = None
