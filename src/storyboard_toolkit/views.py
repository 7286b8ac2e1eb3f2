"""
Slide Views

One immutable view type per slide layout. Each view holds exactly the
fields its layout displays; speaker notes never reach a view.

All views expose `layout`, `slide_id`, `footer`, `to_dict()` and
`text_lines()` so callers can treat them uniformly.
"""

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

LEFT_COLUMN_LABEL = "Key Drivers"
RIGHT_COLUMN_LABEL = "Implications"
UNSUPPORTED_LAYOUT_MESSAGE = "Unsupported Layout"
BAR_CHART_SOURCE = "Source: Internal Analysis; Market Data 2024"
LINE_CHART_SOURCE = "Source: Projections Q1-Q4"


# ============================================================
# SHARED BLOCKS
# ============================================================

@dataclass(frozen=True)
class HeaderView:
    """Kicker, action title and tracker shown above every non-title slide."""
    kicker: str
    action_title: str
    tracker: str

    def text_lines(self) -> List[str]:
        return [f"{self.kicker.upper()}{' ' * 4}[{self.tracker}]", self.action_title, ""]


@dataclass(frozen=True)
class FooterView:
    text: str
    page_number: int


@dataclass(frozen=True)
class ChartSeries:
    """One plotted series. None marks a category with no value."""
    key: str
    values: Tuple[Optional[float], ...]


@dataclass(frozen=True)
class ChartView:
    title: Optional[str]
    x_label: Optional[str]
    y_label: Optional[str]
    categories: Tuple[str, ...]
    series: Tuple[ChartSeries, ...]

    @property
    def series_count(self) -> int:
        return len(self.series)


@dataclass(frozen=True)
class KpiCardView:
    label: str
    value: str
    delta: str
    positive: bool

    @property
    def badge(self) -> str:
        return f"{self.delta} vs LY"


class _ViewMixin:
    layout: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["layout"] = self.layout
        return data

    def _footer_lines(self) -> List[str]:
        footer = getattr(self, "footer", None)
        if footer is None:
            return []
        return ["", f"{footer.text}{' ' * 4}{footer.page_number}"]


def _bullets(items: Tuple[str, ...]) -> List[str]:
    return [f"  • {item}" for item in items]


# ============================================================
# LAYOUT VIEWS
# ============================================================

@dataclass(frozen=True)
class TitleView(_ViewMixin):
    """Full-bleed cover."""
    layout: ClassVar[str] = "TITLE"
    slide_id: str
    kicker: str
    headline: str
    subheading: Optional[str]
    confidentiality: str
    footer: Optional[FooterView] = None

    def text_lines(self) -> List[str]:
        lines = [self.kicker.upper(), "", self.headline]
        if self.subheading:
            lines.append(self.subheading)
        lines.extend(["", self.confidentiality])
        return lines


@dataclass(frozen=True)
class BulletsView(_ViewMixin):
    layout: ClassVar[str] = "BULLET_POINTS"
    slide_id: str
    header: HeaderView
    bullets: Tuple[str, ...]
    footer: Optional[FooterView] = None

    def text_lines(self) -> List[str]:
        return self.header.text_lines() + _bullets(self.bullets) + self._footer_lines()


@dataclass(frozen=True)
class TwoColumnView(_ViewMixin):
    layout: ClassVar[str] = "TWO_COLUMN"
    slide_id: str
    header: HeaderView
    left: Tuple[str, ...]
    right: Tuple[str, ...]
    left_label: str = LEFT_COLUMN_LABEL
    right_label: str = RIGHT_COLUMN_LABEL
    footer: Optional[FooterView] = None

    def text_lines(self) -> List[str]:
        lines = self.header.text_lines()
        lines.append(self.left_label.upper())
        lines.extend(_bullets(self.left))
        lines.append(self.right_label.upper())
        lines.extend(_bullets(self.right))
        return lines + self._footer_lines()


def _chart_lines(chart: ChartView) -> List[str]:
    lines = []
    if chart.title:
        lines.append(chart.title)
    keys = [s.key for s in chart.series]
    for i, category in enumerate(chart.categories):
        values = ", ".join(
            f"{key}={s.values[i]:g}" for key, s in zip(keys, chart.series) if s.values[i] is not None
        )
        lines.append(f"  {category}: {values}")
    return lines


@dataclass(frozen=True)
class BarChartView(_ViewMixin):
    """Horizontal bar chart; a second series only when the first point has value2."""
    layout: ClassVar[str] = "CHART_BAR"
    slide_id: str
    header: HeaderView
    chart: ChartView
    source: str = BAR_CHART_SOURCE
    footer: Optional[FooterView] = None

    def text_lines(self) -> List[str]:
        return self.header.text_lines() + _chart_lines(self.chart) + [self.source] + self._footer_lines()


@dataclass(frozen=True)
class LineChartView(_ViewMixin):
    layout: ClassVar[str] = "CHART_LINE"
    slide_id: str
    header: HeaderView
    chart: ChartView
    source: str = LINE_CHART_SOURCE
    footer: Optional[FooterView] = None

    def text_lines(self) -> List[str]:
        return self.header.text_lines() + _chart_lines(self.chart) + [self.source] + self._footer_lines()


@dataclass(frozen=True)
class KpiGridView(_ViewMixin):
    layout: ClassVar[str] = "KPI_GRID"
    slide_id: str
    header: HeaderView
    cards: Tuple[KpiCardView, ...]
    footer: Optional[FooterView] = None

    def text_lines(self) -> List[str]:
        lines = self.header.text_lines()
        for card in self.cards:
            sign = "▲" if card.positive else "▼"
            lines.append(f"  {card.label}: {card.value}  {sign} {card.badge}")
        return lines + self._footer_lines()


@dataclass(frozen=True)
class UnsupportedLayoutView(_ViewMixin):
    """Placeholder for a layout the renderer does not know."""
    slide_id: str
    requested_layout: str
    message: str = UNSUPPORTED_LAYOUT_MESSAGE
    footer: Optional[FooterView] = None

    @property
    def layout(self) -> str:  # type: ignore[override]
        return self.requested_layout

    def text_lines(self) -> List[str]:
        return [self.message]


SlideView = Union[
    TitleView,
    BulletsView,
    TwoColumnView,
    BarChartView,
    LineChartView,
    KpiGridView,
    UnsupportedLayoutView,
]
