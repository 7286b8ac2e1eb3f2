"""
Deck Renderer

Pure mapping from (Deck, slide index) to a slide view. Dispatch goes
through LAYOUT_RENDERERS; a layout missing from the registry renders as
an UnsupportedLayoutView instead of raising.

The only outside input is the date used for the confidentiality line,
which defaults to today and can be passed in.
"""

import logging
from datetime import date
from typing import Callable, Dict, Optional

from .schema import Deck, Slide, SlideContent, SlideLayout
from .views import (
    BarChartView,
    BulletsView,
    ChartSeries,
    ChartView,
    FooterView,
    HeaderView,
    KpiCardView,
    KpiGridView,
    LineChartView,
    SlideView,
    TitleView,
    TwoColumnView,
    UnsupportedLayoutView,
)

logger = logging.getLogger(__name__)

PRIMARY_SERIES = "value"
COMPARISON_SERIES = "value2"


def kpi_delta_is_positive(delta: str) -> bool:
    """A delta is positive iff it contains a literal '+'.

    No numeric parsing: "0%" or "flat" count as negative.
    """
    return "+" in delta


def confidentiality_line(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"CONFIDENTIAL • {today.year}"


def _header(slide: Slide) -> HeaderView:
    return HeaderView(kicker=slide.kicker, action_title=slide.action_title, tracker=slide.tracker)


def _title_subheading(content: SlideContent) -> Optional[str]:
    if content.chart_title:
        return content.chart_title
    if content.bullets:
        return content.bullets[0]
    return None


def _chart(content: SlideContent, allow_comparison: bool) -> ChartView:
    points = content.chart_data or ()
    series = [ChartSeries(PRIMARY_SERIES, tuple(p.value for p in points))]
    # The first point alone decides whether the comparison series is drawn.
    if allow_comparison and points and points[0].value2 is not None:
        series.append(ChartSeries(COMPARISON_SERIES, tuple(p.value2 for p in points)))
    return ChartView(
        title=content.chart_title,
        x_label=content.chart_x_label,
        y_label=content.chart_y_label,
        categories=tuple(p.label for p in points),
        series=tuple(series),
    )


# ============================================================
# PER-LAYOUT BUILDERS
# ============================================================

def _render_title(slide: Slide, footer: Optional[FooterView], today: Optional[date]) -> TitleView:
    return TitleView(
        slide_id=slide.id,
        kicker=slide.kicker,
        headline=slide.action_title,
        subheading=_title_subheading(slide.content),
        confidentiality=confidentiality_line(today),
    )


def _render_bullets(slide: Slide, footer: Optional[FooterView], today: Optional[date]) -> BulletsView:
    return BulletsView(
        slide_id=slide.id,
        header=_header(slide),
        bullets=tuple(slide.content.bullets or ()),
        footer=footer,
    )


def _render_two_column(slide: Slide, footer: Optional[FooterView], today: Optional[date]) -> TwoColumnView:
    return TwoColumnView(
        slide_id=slide.id,
        header=_header(slide),
        left=tuple(slide.content.left_column or ()),
        right=tuple(slide.content.right_column or ()),
        footer=footer,
    )


def _render_bar_chart(slide: Slide, footer: Optional[FooterView], today: Optional[date]) -> BarChartView:
    return BarChartView(
        slide_id=slide.id,
        header=_header(slide),
        chart=_chart(slide.content, allow_comparison=True),
        footer=footer,
    )


def _render_line_chart(slide: Slide, footer: Optional[FooterView], today: Optional[date]) -> LineChartView:
    return LineChartView(
        slide_id=slide.id,
        header=_header(slide),
        chart=_chart(slide.content, allow_comparison=False),
        footer=footer,
    )


def _render_kpi_grid(slide: Slide, footer: Optional[FooterView], today: Optional[date]) -> KpiGridView:
    cards = tuple(
        KpiCardView(
            label=kpi.label,
            value=kpi.value,
            delta=kpi.delta,
            positive=kpi_delta_is_positive(kpi.delta),
        )
        for kpi in slide.content.kpi_data or ()
    )
    return KpiGridView(slide_id=slide.id, header=_header(slide), cards=cards, footer=footer)


LayoutRenderer = Callable[[Slide, Optional[FooterView], Optional[date]], SlideView]

LAYOUT_RENDERERS: Dict[SlideLayout, LayoutRenderer] = {
    SlideLayout.TITLE: _render_title,
    SlideLayout.BULLET_POINTS: _render_bullets,
    SlideLayout.TWO_COLUMN: _render_two_column,
    SlideLayout.CHART_BAR: _render_bar_chart,
    SlideLayout.CHART_LINE: _render_line_chart,
    SlideLayout.KPI_GRID: _render_kpi_grid,
}


def footer_for(deck: Deck, index: int) -> Optional[FooterView]:
    """Footer for non-title slides: deck title and author plus the page number."""
    if deck.slides[index].layout == SlideLayout.TITLE:
        return None
    text = " • ".join(part for part in (deck.title, deck.author) if part)
    return FooterView(text=text, page_number=index + 1)


def render_slide(deck: Deck, index: int, today: Optional[date] = None) -> SlideView:
    """Render one slide of the deck.

    Args:
        deck: An accepted deck
        index: Zero-based slide index
        today: Date for the confidentiality line (defaults to the system clock)

    Returns:
        The view for the slide's layout, or an UnsupportedLayoutView

    Raises:
        IndexError: if index is outside the deck
    """
    if not 0 <= index < len(deck.slides):
        raise IndexError(f"Slide index {index} out of range for {len(deck.slides)} slides")

    slide = deck.slides[index]
    builder = LAYOUT_RENDERERS.get(slide.layout)
    if builder is None:
        layout = getattr(slide.layout, "value", slide.layout)
        logger.warning("Slide %s has unsupported layout %r", slide.id, layout)
        return UnsupportedLayoutView(slide_id=slide.id, requested_layout=str(layout))
    return builder(slide, footer_for(deck, index), today)
