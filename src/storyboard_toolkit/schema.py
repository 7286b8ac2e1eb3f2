"""
Slide Schema

Pydantic v2 models for the closed deck vocabulary: the deck, its slides,
the layout-dependent content bag and the attachments forwarded to the
generation service. Field names on the wire (and in exported JSON) are
camelCase; Python attributes are snake_case aliases of them.

Also provides the output-shape constraint handed to the generation service
so that it emits only conforming objects.
"""

import base64
import binascii
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import AttachmentError


class SlideLayout(str, Enum):
    """Closed set of slide layouts. Anything else is a schema violation."""
    TITLE = "TITLE"
    BULLET_POINTS = "BULLET_POINTS"
    TWO_COLUMN = "TWO_COLUMN"
    CHART_BAR = "CHART_BAR"
    CHART_LINE = "CHART_LINE"
    KPI_GRID = "KPI_GRID"


# Content fields that carry meaning for each layout.
LAYOUT_CONTENT_FIELDS: Dict[SlideLayout, Tuple[str, ...]] = {
    SlideLayout.TITLE: ("chartTitle", "bullets"),
    SlideLayout.BULLET_POINTS: ("bullets",),
    SlideLayout.TWO_COLUMN: ("leftColumn", "rightColumn"),
    SlideLayout.CHART_BAR: ("chartTitle", "chartXLabel", "chartYLabel", "chartData"),
    SlideLayout.CHART_LINE: ("chartTitle", "chartXLabel", "chartYLabel", "chartData"),
    SlideLayout.KPI_GRID: ("kpiData",),
}


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ChartPoint(_FrozenModel):
    """One category on a bar or line chart."""
    label: str
    value: float
    value2: Optional[float] = None


class KpiEntry(_FrozenModel):
    """A headline metric. `value` and `delta` are pre-formatted strings."""
    label: str
    value: str
    delta: str = ""


class SlideContent(_FrozenModel):
    """Layout-dependent payload. Permissive: the renderer picks what it needs."""
    bullets: Optional[Tuple[str, ...]] = None
    left_column: Optional[Tuple[str, ...]] = Field(None, alias="leftColumn")
    right_column: Optional[Tuple[str, ...]] = Field(None, alias="rightColumn")
    chart_title: Optional[str] = Field(None, alias="chartTitle")
    chart_x_label: Optional[str] = Field(None, alias="chartXLabel")
    chart_y_label: Optional[str] = Field(None, alias="chartYLabel")
    chart_data: Optional[Tuple[ChartPoint, ...]] = Field(None, alias="chartData")
    kpi_data: Optional[Tuple[KpiEntry, ...]] = Field(None, alias="kpiData")


class Slide(_FrozenModel):
    """A single presentation unit."""
    id: str = ""
    layout: SlideLayout
    tracker: str
    kicker: str
    action_title: str = Field(alias="actionTitle")
    speaker_notes: str = Field("", alias="speakerNotes")
    content: SlideContent = Field(default_factory=SlideContent)

    @field_validator("id", "speaker_notes", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("content", mode="before")
    @classmethod
    def none_as_empty_content(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("tracker", "kicker", "action_title")
    @classmethod
    def must_not_be_blank(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v


class Deck(_FrozenModel):
    """Top-level synthesized presentation."""
    title: str = ""
    subtitle: str = ""
    author: str = ""
    slides: Tuple[Slide, ...] = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def fill_missing_slide_ids(cls, data: Any) -> Any:
        """Give every slide without an id a positional one (slide-1, slide-2, ...)."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("title", "subtitle", "author"):
            if data.get(key) is None:
                data.pop(key, None)
        slides = data.get("slides")
        if isinstance(slides, (list, tuple)):
            filled = []
            for n, slide in enumerate(slides, 1):
                if isinstance(slide, dict) and not slide.get("id"):
                    slide = {**slide, "id": f"slide-{n}"}
                filled.append(slide)
            data["slides"] = filled
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase export structure."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FileInput(_FrozenModel):
    """An attachment forwarded verbatim to the generation service."""
    name: str
    mime_type: str = Field(alias="mimeType")
    data: str

    @property
    def raw_bytes(self) -> bytes:
        """Decode the base64 payload."""
        try:
            return base64.b64decode(self.data, validate=True)
        except binascii.Error as exc:
            raise AttachmentError(f"Attachment {self.name!r} is not valid base64") from exc


# ============================================================
# OUTPUT-SHAPE CONSTRAINT
# ============================================================

def _string(description: str = "") -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "STRING"}
    if description:
        schema["description"] = description
    return schema


def _string_list() -> Dict[str, Any]:
    return {"type": "ARRAY", "items": {"type": "STRING"}}


def deck_response_schema() -> Dict[str, Any]:
    """Return the response schema the generation service must conform to.

    Expressed in the service's OpenAPI-subset dialect (upper-case type names).
    """
    slide = {
        "type": "OBJECT",
        "properties": {
            "id": _string(),
            "layout": {
                "type": "STRING",
                "enum": [layout.value for layout in SlideLayout],
            },
            "tracker": _string("Section name for breadcrumbs"),
            "kicker": _string("Small context label above title (e.g., 'MARKET ANALYSIS')"),
            "actionTitle": _string("Full sentence executive summary of the slide"),
            "speakerNotes": _string(),
            "content": {
                "type": "OBJECT",
                "properties": {
                    "bullets": _string_list(),
                    "leftColumn": _string_list(),
                    "rightColumn": _string_list(),
                    "chartTitle": _string(),
                    "chartXLabel": _string(),
                    "chartYLabel": _string(),
                    "chartData": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "label": {"type": "STRING"},
                                "value": {"type": "NUMBER"},
                                "value2": {"type": "NUMBER"},
                            },
                        },
                    },
                    "kpiData": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "label": {"type": "STRING"},
                                "value": {"type": "STRING"},
                                "delta": {"type": "STRING"},
                            },
                        },
                    },
                },
            },
        },
        "required": ["layout", "actionTitle", "tracker", "kicker"],
    }
    return {
        "type": "OBJECT",
        "properties": {
            "title": _string("Main deck title"),
            "subtitle": _string("Deck subtitle/context"),
            "author": _string("Presenter name/role"),
            "slides": {"type": "ARRAY", "items": slide},
        },
        "required": ["title", "slides"],
    }
