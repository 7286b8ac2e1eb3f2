"""
PowerPoint Output

Writes every slide of a deck to a widescreen .pptx, drawing each rendered
view with its cookbook recipe. Charts are native PowerPoint charts and
speaker notes go to the notes pane.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Union

from pptx import Presentation
from pptx.chart.data import CategoryChartData
from pptx.dml.color import RGBColor
from pptx.enum.chart import XL_CHART_TYPE, XL_LEGEND_POSITION
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.util import Emu, Pt

from .cookbook import (
    CARD_FILL,
    EMU_PER_INCH,
    FOOTER_PAGE,
    FOOTER_TEXT,
    LIGHT_SLATE,
    NAVY,
    NEGATIVE_COLOR,
    POSITIVE_COLOR,
    SLATE,
    SLIDE_HEIGHT_EMU,
    SLIDE_WIDTH_EMU,
    TEAL,
    UNSUPPORTED_RECIPE,
    BoxPosition,
    LayoutRecipe,
    TextBoxSpec,
    get_recipe,
    kpi_card_positions,
)
from .renderer import render_slide
from .schema import Deck
from .views import (
    BarChartView,
    BulletsView,
    ChartView,
    HeaderView,
    KpiGridView,
    LineChartView,
    TitleView,
    TwoColumnView,
    UnsupportedLayoutView,
)

logger = logging.getLogger(__name__)

DEFAULT_PPTX_FILENAME = "presentation.pptx"
BLANK_LAYOUT_INDEX = 6

_ALIGN = {"l": PP_ALIGN.LEFT, "ctr": PP_ALIGN.CENTER, "r": PP_ALIGN.RIGHT}
_ANCHOR = {"t": MSO_ANCHOR.TOP, "ctr": MSO_ANCHOR.MIDDLE, "b": MSO_ANCHOR.BOTTOM}
_SERIES_COLORS = (NAVY, TEAL)


# ============================================================
# DRAWING PRIMITIVES
# ============================================================

def _rgb(hex_color: str) -> RGBColor:
    return RGBColor.from_string(hex_color)


def add_text_box(slide, spec: TextBoxSpec, text: Union[str, Iterable[str]], bullets: bool = False):
    """Add a text box for `spec`. A list of strings becomes one paragraph each."""
    pos = spec.position
    shape = slide.shapes.add_textbox(Emu(pos.x), Emu(pos.y), Emu(pos.cx), Emu(pos.cy))
    shape.name = spec.name
    frame = shape.text_frame
    frame.word_wrap = True
    frame.vertical_anchor = _ANCHOR[spec.vertical_anchor]

    lines = [text] if isinstance(text, str) else list(text)
    for i, line in enumerate(lines or [""]):
        paragraph = frame.paragraphs[0] if i == 0 else frame.add_paragraph()
        paragraph.alignment = _ALIGN[spec.alignment]
        run = paragraph.add_run()
        run.text = f"• {line}" if bullets and line else line
        font = run.font
        font.size = Pt(spec.font_size_pt)
        font.bold = spec.bold
        font.italic = spec.italic
        font.color.rgb = _rgb(spec.font_color)
    return shape


def _fill_background(slide, recipe: LayoutRecipe) -> None:
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = _rgb(recipe.background.color)


def _draw_header(slide, recipe: LayoutRecipe, header: HeaderView) -> None:
    add_text_box(slide, recipe.box("kicker"), header.kicker.upper())
    add_text_box(slide, recipe.box("title"), header.action_title)
    add_text_box(slide, recipe.box("tracker"), header.tracker)


def _draw_chart(slide, box: BoxPosition, chart: ChartView, chart_type) -> None:
    if not chart.categories:
        add_text_box(slide, TextBoxSpec(name="chart_empty", position=box, font_color=SLATE), "No chart data")
        return

    data = CategoryChartData()
    data.categories = chart.categories
    for series in chart.series:
        data.add_series(series.key, series.values)

    frame = slide.shapes.add_chart(chart_type, Emu(box.x), Emu(box.y), Emu(box.cx), Emu(box.cy), data)
    pptx_chart = frame.chart
    pptx_chart.has_legend = chart.series_count > 1
    if pptx_chart.has_legend:
        pptx_chart.legend.position = XL_LEGEND_POSITION.BOTTOM
        pptx_chart.legend.include_in_layout = False

    if chart.title:
        pptx_chart.has_title = True
        pptx_chart.chart_title.text_frame.text = chart.title
    else:
        pptx_chart.has_title = False

    if chart.x_label:
        pptx_chart.category_axis.has_title = True
        pptx_chart.category_axis.axis_title.text_frame.text = chart.x_label
    if chart.y_label:
        pptx_chart.value_axis.has_title = True
        pptx_chart.value_axis.axis_title.text_frame.text = chart.y_label

    for i, plotted in enumerate(pptx_chart.plots[0].series):
        if chart_type == XL_CHART_TYPE.LINE_MARKERS:
            plotted.format.line.color.rgb = _rgb(TEAL)
            plotted.smooth = True
        else:
            plotted.format.fill.solid()
            plotted.format.fill.fore_color.rgb = _rgb(_SERIES_COLORS[i % len(_SERIES_COLORS)])


# ============================================================
# PER-VIEW DRAWERS
# ============================================================

def _draw_title(slide, view: TitleView) -> None:
    recipe = get_recipe("TITLE")
    _fill_background(slide, recipe)
    add_text_box(slide, recipe.box("kicker"), view.kicker.upper())
    add_text_box(slide, recipe.box("title"), view.headline)
    if view.subheading:
        add_text_box(slide, recipe.box("subtitle"), view.subheading)
    add_text_box(slide, recipe.box("confidential"), view.confidentiality)


def _draw_bullets(slide, view: BulletsView) -> None:
    recipe = get_recipe(view.layout)
    _draw_header(slide, recipe, view.header)
    add_text_box(slide, recipe.box("body"), view.bullets, bullets=True)


def _draw_two_column(slide, view: TwoColumnView) -> None:
    recipe = get_recipe(view.layout)
    _draw_header(slide, recipe, view.header)
    add_text_box(slide, recipe.box("left_label"), view.left_label.upper())
    add_text_box(slide, recipe.box("left_body"), view.left, bullets=True)
    add_text_box(slide, recipe.box("right_label"), view.right_label.upper())
    add_text_box(slide, recipe.box("right_body"), view.right, bullets=True)


def _draw_bar_chart(slide, view: BarChartView) -> None:
    recipe = get_recipe(view.layout)
    _draw_header(slide, recipe, view.header)
    _draw_chart(slide, recipe.chart_box, view.chart, XL_CHART_TYPE.BAR_CLUSTERED)
    add_text_box(slide, recipe.box("source"), view.source)


def _draw_line_chart(slide, view: LineChartView) -> None:
    recipe = get_recipe(view.layout)
    _draw_header(slide, recipe, view.header)
    _draw_chart(slide, recipe.chart_box, view.chart, XL_CHART_TYPE.LINE_MARKERS)
    add_text_box(slide, recipe.box("source"), view.source)


def _draw_kpi_grid(slide, view: KpiGridView) -> None:
    recipe = get_recipe(view.layout)
    _draw_header(slide, recipe, view.header)
    for card, pos in zip(view.cards, kpi_card_positions(len(view.cards), area=recipe.chart_box)):
        shape = slide.shapes.add_shape(
            MSO_SHAPE.ROUNDED_RECTANGLE, Emu(pos.x), Emu(pos.y), Emu(pos.cx), Emu(pos.cy)
        )
        shape.name = f"kpi_card_{card.label}"
        shape.fill.solid()
        shape.fill.fore_color.rgb = _rgb(CARD_FILL)
        shape.line.color.rgb = _rgb(LIGHT_SLATE)

        third = pos.cy // 3
        add_text_box(slide, TextBoxSpec(
            name="kpi_label",
            position=BoxPosition(pos.x, pos.y, pos.cx, third),
            font_size_pt=11,
            bold=True,
            alignment="ctr",
            font_color=SLATE,
            vertical_anchor="b",
        ), card.label.upper())
        add_text_box(slide, TextBoxSpec(
            name="kpi_value",
            position=BoxPosition(pos.x, pos.y + third, pos.cx, third),
            font_size_pt=32,
            bold=True,
            alignment="ctr",
            vertical_anchor="ctr",
        ), card.value)
        add_text_box(slide, TextBoxSpec(
            name="kpi_delta",
            position=BoxPosition(pos.x, pos.y + 2 * third, pos.cx, min(third, EMU_PER_INCH)),
            font_size_pt=12,
            bold=True,
            alignment="ctr",
            font_color=POSITIVE_COLOR if card.positive else NEGATIVE_COLOR,
        ), card.badge)


def _draw_unsupported(slide, view: UnsupportedLayoutView) -> None:
    add_text_box(slide, UNSUPPORTED_RECIPE.box("message"), view.message)


_DRAWERS: Dict[type, Callable] = {
    TitleView: _draw_title,
    BulletsView: _draw_bullets,
    TwoColumnView: _draw_two_column,
    BarChartView: _draw_bar_chart,
    LineChartView: _draw_line_chart,
    KpiGridView: _draw_kpi_grid,
    UnsupportedLayoutView: _draw_unsupported,
}


# ============================================================
# ENTRY POINT
# ============================================================

def render_deck_to_pptx(
    deck: Deck,
    output_path: Union[str, Path] = DEFAULT_PPTX_FILENAME,
    today: Optional[date] = None,
) -> Path:
    """Write all slides of `deck` to a .pptx file.

    Args:
        deck: An accepted deck
        output_path: Destination file
        today: Date for the confidentiality line on title slides

    Returns:
        Path to the written file
    """
    output_path = Path(output_path)
    prs = Presentation()
    prs.slide_width = Emu(SLIDE_WIDTH_EMU)
    prs.slide_height = Emu(SLIDE_HEIGHT_EMU)
    blank = prs.slide_layouts[BLANK_LAYOUT_INDEX]

    for index, source in enumerate(deck.slides):
        view = render_slide(deck, index, today=today)
        slide = prs.slides.add_slide(blank)
        _DRAWERS[type(view)](slide, view)

        if view.footer is not None:
            add_text_box(slide, FOOTER_TEXT, view.footer.text)
            add_text_box(slide, FOOTER_PAGE, str(view.footer.page_number))

        if source.speaker_notes:
            slide.notes_slide.notes_text_frame.text = source.speaker_notes

    output_path.parent.mkdir(parents=True, exist_ok=True)
    prs.save(str(output_path))
    logger.info("Wrote %d slides to %s", len(deck.slides), output_path)
    return output_path
