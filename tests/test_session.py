"""Tests for the synthesis session state machine."""

from types import SimpleNamespace

import httpx
import pytest

from storyboard_toolkit.config import SynthesisConfig
from storyboard_toolkit.errors import (
    ConfigurationError,
    EmptyInputError,
    GenerationServiceError,
    SessionBusyError,
)
from storyboard_toolkit.infographic import InfographicResult
from storyboard_toolkit.schema import Deck
from storyboard_toolkit.service import GeminiService
from storyboard_toolkit.session import (
    DECK_FAILURE_MESSAGE,
    EMPTY_INPUT_MESSAGE,
    INFOGRAPHIC_FAILURE_MESSAGE,
    GenerationMode,
    SessionStatus,
    SynthesisSession,
)

OBJECTIVE = "Assess whether we should enter the Vietnamese market."


# ============================================================
# PRE-FLIGHT
# ============================================================

@pytest.mark.parametrize("objective", ["", "   ", " " * 12, "too short"])
def test_empty_input_makes_no_calls(fake_service_cls, objective):
    service = fake_service_cls()
    session = SynthesisSession(service)
    assert session.generate([], objective) is None
    assert service.calls == []
    assert session.error_message == EMPTY_INPUT_MESSAGE
    assert isinstance(session.last_error, EmptyInputError)
    assert session.status == SessionStatus.IDLE


def test_check_inputs_counts_trimmed_characters(fake_service_cls):
    session = SynthesisSession(fake_service_cls())
    with pytest.raises(EmptyInputError):
        session.check_inputs([], "  123456789  ")
    session.check_inputs([], "1234567890")


def test_files_alone_are_enough(fake_service_cls, attachment, deck_json):
    service = fake_service_cls(structured=deck_json)
    session = SynthesisSession(service)
    assert isinstance(session.generate([attachment], ""), Deck)
    assert service.call_kinds == ["structured"]


# ============================================================
# DECK MODE
# ============================================================

def test_successful_deck_generation(fake_service_cls, deck_json):
    service = fake_service_cls(structured=deck_json)
    session = SynthesisSession(service)
    deck = session.generate([], OBJECTIVE)
    assert session.status == SessionStatus.COMPLETE
    assert session.deck is deck
    assert session.navigator.index == 0
    assert session.navigator.deck is deck
    assert session.error_message is None
    request = service.calls[0][1]
    assert request.is_structured
    assert OBJECTIVE in request.prompt


@pytest.mark.parametrize("raw", ["", "not json at all", '{"title": "x", "slides": []}', "[1, 2]"])
def test_malformed_response_sets_error(fake_service_cls, raw):
    session = SynthesisSession(fake_service_cls(structured=raw))
    assert session.generate([], OBJECTIVE) is None
    assert session.status == SessionStatus.ERROR
    assert session.error_message == DECK_FAILURE_MESSAGE
    assert session.deck is None
    assert session.navigator is None


def test_transport_failure_sets_error(fake_service_cls):
    session = SynthesisSession(fake_service_cls(error=GenerationServiceError("503")))
    assert session.generate([], OBJECTIVE) is None
    assert session.status == SessionStatus.ERROR
    assert session.error_message == DECK_FAILURE_MESSAGE
    assert isinstance(session.last_error, GenerationServiceError)


def test_configuration_error_message_is_shown(fake_service_cls):
    session = SynthesisSession(fake_service_cls(error=ConfigurationError("API key not found.")))
    session.generate([], OBJECTIVE)
    assert session.status == SessionStatus.ERROR
    assert session.error_message == "API key not found."


def test_unexpected_exception_sets_error_and_propagates(fake_service_cls):
    session = SynthesisSession(fake_service_cls(error=RuntimeError("bug")))
    with pytest.raises(RuntimeError):
        session.generate([], OBJECTIVE)
    assert session.status == SessionStatus.ERROR
    assert session.is_busy is False


def test_new_generation_clears_previous_result(fake_service_cls, deck_json):
    service = fake_service_cls(structured=deck_json)
    session = SynthesisSession(service)
    session.generate([], OBJECTIVE)
    service.structured = "garbage"
    session.generate([], OBJECTIVE)
    assert session.deck is None
    assert session.status == SessionStatus.ERROR

    service.structured = deck_json
    assert session.generate([], OBJECTIVE) is not None
    assert session.status == SessionStatus.COMPLETE
    assert session.error_message is None


# ============================================================
# INFOGRAPHIC MODE
# ============================================================

def test_infographic_generation(fake_service_cls):
    service = fake_service_cls(text="A navy and teal infographic.")
    session = SynthesisSession(service, mode=GenerationMode.INFOGRAPHIC)
    result = session.generate([], OBJECTIVE)
    assert isinstance(result, InfographicResult)
    assert session.infographic is result
    assert session.deck is None
    assert session.status == SessionStatus.COMPLETE
    assert service.call_kinds == ["text", "image"]


def test_infographic_without_image_reports_failure(fake_service_cls):
    service = fake_service_cls(text="brief", image_parts=[])
    session = SynthesisSession(service, mode=GenerationMode.INFOGRAPHIC)
    assert session.generate([], OBJECTIVE) is None
    assert session.status == SessionStatus.ERROR
    assert session.error_message == INFOGRAPHIC_FAILURE_MESSAGE


# ============================================================
# BUSY GUARD
# ============================================================

def test_second_generate_while_busy_is_rejected(fake_service_cls, deck_json):
    class ReentrantService(fake_service_cls):
        def synthesize_structured(self, request):
            self.calls.append(("structured", request))
            assert session.status == SessionStatus.BUSY
            with pytest.raises(SessionBusyError):
                session.generate([], OBJECTIVE)
            return deck_json

    service = ReentrantService()
    session = SynthesisSession(service)
    assert session.generate([], OBJECTIVE) is not None
    assert service.call_kinds == ["structured"]
    assert session.status == SessionStatus.COMPLETE


def test_reset_returns_to_idle(fake_service_cls, deck_json):
    session = SynthesisSession(fake_service_cls(structured=deck_json))
    session.generate([], OBJECTIVE)
    session.reset()
    assert session.status == SessionStatus.IDLE
    assert session.deck is None
    assert session.navigator is None
    assert session.error_message is None


# ============================================================
# TRANSPORT FAILURES
# ============================================================

def _unreachable_gemini():
    class Models:
        def generate_content(self, model, contents, config=None):
            raise httpx.ConnectError("connection refused")

    return GeminiService(SynthesisConfig(api_key="k"), client=SimpleNamespace(models=Models()))


def test_network_outage_sets_deck_failure_message():
    session = SynthesisSession(_unreachable_gemini())
    assert session.generate([], OBJECTIVE) is None
    assert session.status == SessionStatus.ERROR
    assert session.error_message == DECK_FAILURE_MESSAGE
    assert isinstance(session.last_error, GenerationServiceError)


def test_network_outage_in_infographic_mode():
    session = SynthesisSession(_unreachable_gemini(), mode=GenerationMode.INFOGRAPHIC)
    assert session.generate([], OBJECTIVE) is None
    assert session.error_message == INFOGRAPHIC_FAILURE_MESSAGE
