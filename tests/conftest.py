"""Shared fixtures: sample deck payloads and a scripted generation service."""

import base64
import copy
import json
from typing import List, Optional

import pytest

from storyboard_toolkit.schema import FileInput
from storyboard_toolkit.service import ContentPart

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"


SAMPLE_DECK = {
    "title": "Market Entry Assessment",
    "subtitle": "Southeast Asia expansion",
    "author": "Strategy Office",
    "slides": [
        {
            "id": "s1",
            "layout": "TITLE",
            "tracker": "Introduction",
            "kicker": "EXECUTIVE SUMMARY",
            "actionTitle": "Entering Vietnam first captures 60% of the regional upside at half the risk.",
            "speakerNotes": "Open with the recommendation.",
            "content": {"chartTitle": "Board pre-read", "bullets": ["Unused bullet"]},
        },
        {
            "id": "s2",
            "layout": "BULLET_POINTS",
            "tracker": "Situation",
            "kicker": "MARKET CONTEXT",
            "actionTitle": "Demand is growing 14% a year while local supply stays fragmented.",
            "speakerNotes": "Stress the fragmentation point.",
            "content": {"bullets": ["Demand up 14% CAGR", "Top 3 players hold 22% share"]},
        },
        {
            "id": "s3",
            "layout": "TWO_COLUMN",
            "tracker": "Analysis",
            "kicker": "DRIVERS",
            "actionTitle": "Urbanisation and digital payments drive adoption, which favours an asset-light model.",
            "speakerNotes": "",
            "content": {
                "leftColumn": ["Urbanisation", "Digital payments"],
                "rightColumn": ["Asset-light entry", "Partner-led distribution"],
            },
        },
        {
            "id": "s4",
            "layout": "CHART_BAR",
            "tracker": "Analysis",
            "kicker": "REVENUE",
            "actionTitle": "Revenue grew 40% quarter on quarter, outpacing last year in every period.",
            "speakerNotes": "Indicative figures.",
            "content": {
                "chartTitle": "Revenue by quarter ($M)",
                "chartXLabel": "Quarter",
                "chartYLabel": "Revenue",
                "chartData": [
                    {"label": "Q1", "value": 10, "value2": 5},
                    {"label": "Q2", "value": 14, "value2": 8},
                ],
            },
        },
        {
            "id": "s5",
            "layout": "CHART_LINE",
            "tracker": "Analysis",
            "kicker": "TRAJECTORY",
            "actionTitle": "Margins recover to 18% by year three as scale effects kick in.",
            "speakerNotes": "",
            "content": {
                "chartTitle": "EBITDA margin (%)",
                "chartData": [
                    {"label": "Y1", "value": 4},
                    {"label": "Y2", "value": 11},
                    {"label": "Y3", "value": 18},
                ],
            },
        },
        {
            "id": "s6",
            "layout": "KPI_GRID",
            "tracker": "Recommendation",
            "kicker": "TARGETS",
            "actionTitle": "Three metrics will tell the board whether the entry is on track.",
            "speakerNotes": "Close on targets.",
            "content": {
                "kpiData": [
                    {"label": "Revenue", "value": "$4.2M", "delta": "+12%"},
                    {"label": "Churn", "value": "3.1%", "delta": "-3%"},
                    {"label": "NPS", "value": "41", "delta": "flat"},
                ],
            },
        },
    ],
}


@pytest.fixture
def deck_payload():
    """A fresh, mutable copy of the sample deck payload."""
    return copy.deepcopy(SAMPLE_DECK)


@pytest.fixture
def deck_json(deck_payload):
    return json.dumps(deck_payload)


@pytest.fixture
def sample_deck(deck_json):
    from storyboard_toolkit.acceptor import accept_deck
    return accept_deck(deck_json)


@pytest.fixture
def attachment():
    return FileInput(
        name="notes.txt",
        mime_type="text/plain",
        data=base64.b64encode(b"Quarterly revenue grew 40%.").decode("ascii"),
    )


class FakeService:
    """Scripted GenerationService that records every call."""

    def __init__(
        self,
        structured: str = "",
        text: str = "",
        image_parts: Optional[List[ContentPart]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.structured = structured
        self.text = text
        self.image_parts = image_parts if image_parts is not None else [
            ContentPart(inline_data=PNG_BYTES, mime_type="image/png")
        ]
        self.error = error
        self.calls: List[tuple] = []

    def synthesize_structured(self, request):
        self.calls.append(("structured", request))
        if self.error:
            raise self.error
        return self.structured

    def synthesize_text(self, request):
        self.calls.append(("text", request))
        if self.error:
            raise self.error
        return self.text

    def synthesize_image(self, prompt, aspect_ratio):
        self.calls.append(("image", prompt, aspect_ratio))
        if self.error:
            raise self.error
        return self.image_parts

    @property
    def call_kinds(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_service_cls():
    return FakeService
