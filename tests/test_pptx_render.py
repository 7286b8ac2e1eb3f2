"""Tests for writing decks to PowerPoint."""

from datetime import date

import pytest
from pptx import Presentation

from storyboard_toolkit.cookbook import SLIDE_HEIGHT_EMU, SLIDE_WIDTH_EMU
from storyboard_toolkit.pptx_render import render_deck_to_pptx
from storyboard_toolkit.schema import Deck


def _texts(slide):
    return [shape.text_frame.text for shape in slide.shapes if shape.has_text_frame]


def _charts(slide):
    return [shape.chart for shape in slide.shapes if shape.has_chart]


@pytest.fixture
def written(tmp_path, sample_deck):
    path = render_deck_to_pptx(sample_deck, tmp_path / "out" / "deck.pptx", today=date(2026, 3, 1))
    return Presentation(str(path))


def test_every_slide_is_written(written, sample_deck):
    assert len(written.slides) == len(sample_deck.slides)
    assert written.slide_width == SLIDE_WIDTH_EMU
    assert written.slide_height == SLIDE_HEIGHT_EMU


def test_title_slide(written, sample_deck):
    texts = _texts(written.slides[0])
    assert sample_deck.slides[0].action_title in texts
    assert "Board pre-read" in texts
    assert "CONFIDENTIAL • 2026" in texts
    assert "Market Entry Assessment • Strategy Office" not in texts


def test_content_slide_header_and_footer(written):
    texts = _texts(written.slides[1])
    assert "MARKET CONTEXT" in texts
    assert "Situation" in texts
    assert "Market Entry Assessment • Strategy Office" in texts
    assert "2" in texts
    assert "• Demand up 14% CAGR\n• Top 3 players hold 22% share" in texts


def test_two_column_labels(written):
    texts = _texts(written.slides[2])
    assert "KEY DRIVERS" in texts
    assert "IMPLICATIONS" in texts


def test_bar_chart_has_comparison_series(written):
    charts = _charts(written.slides[3])
    assert len(charts) == 1
    chart = charts[0]
    series = list(chart.plots[0].series)
    assert len(series) == 2
    assert list(chart.plots[0].categories) == ["Q1", "Q2"]
    assert list(series[0].values) == [10.0, 14.0]
    assert chart.has_legend
    assert chart.chart_title.text_frame.text == "Revenue by quarter ($M)"


def test_line_chart_single_series(written):
    chart = _charts(written.slides[4])[0]
    series = list(chart.plots[0].series)
    assert len(series) == 1
    assert list(series[0].values) == [4.0, 11.0, 18.0]
    assert not chart.has_legend


def test_kpi_cards(written):
    slide = written.slides[5]
    names = {shape.name for shape in slide.shapes}
    assert {"kpi_card_Revenue", "kpi_card_Churn", "kpi_card_NPS"} <= names
    texts = _texts(slide)
    assert "+12% vs LY" in texts
    assert "$4.2M" in texts


def test_speaker_notes_go_to_notes_pane(written, sample_deck):
    assert written.slides[0].notes_slide.notes_text_frame.text == "Open with the recommendation."
    assert not written.slides[2].has_notes_slide
    for slide in written.slides:
        for text in _texts(slide):
            assert "Open with the recommendation." not in text


def test_chart_without_data_gets_placeholder(tmp_path):
    deck = Deck.model_validate({"slides": [{
        "layout": "CHART_LINE",
        "tracker": "t",
        "kicker": "k",
        "actionTitle": "Nothing to plot yet.",
    }]})
    prs = Presentation(str(render_deck_to_pptx(deck, tmp_path / "empty.pptx")))
    assert _charts(prs.slides[0]) == []
    assert "No chart data" in _texts(prs.slides[0])


def test_charts_have_source_caption(written):
    assert "Source: Internal Analysis; Market Data 2024" in _texts(written.slides[3])
    assert "Source: Projections Q1-Q4" in _texts(written.slides[4])
    assert not any(t.startswith("Source:") for t in _texts(written.slides[5]))
