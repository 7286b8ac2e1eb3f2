"""
Slide Layout Cookbook

Explicit positioning recipes for each slide layout, used when writing a
deck to PowerPoint. Every layout has exactly one recipe.

All dimensions are in EMUs (English Metric Units).
1 inch = 914400 EMUs.
Widescreen slide: 13.333" x 7.5" (12192000 x 6858000 EMUs).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .schema import SlideLayout

EMU_PER_INCH = 914400
SLIDE_WIDTH_EMU = 12192000
SLIDE_HEIGHT_EMU = 6858000

NAVY = "0F172A"
TEAL = "0F766E"
SLATE = "64748B"
LIGHT_SLATE = "CBD5E1"
CARD_FILL = "F8FAFC"
WHITE = "FFFFFF"
POSITIVE_COLOR = "15803D"
NEGATIVE_COLOR = "B91C1C"


# ============================================================
# DATA CLASSES
# ============================================================

@dataclass
class BoxPosition:
    """Position and size in EMUs."""
    x: int
    y: int
    cx: int
    cy: int

    @classmethod
    def from_inches(cls, x: float, y: float, w: float, h: float) -> "BoxPosition":
        """Create from inch measurements."""
        return cls(
            x=int(x * EMU_PER_INCH),
            y=int(y * EMU_PER_INCH),
            cx=int(w * EMU_PER_INCH),
            cy=int(h * EMU_PER_INCH),
        )


@dataclass
class TextBoxSpec:
    """Specification for a text box to be placed on a slide."""
    name: str
    position: BoxPosition
    font_size_pt: int = 14
    bold: bool = False
    italic: bool = False
    alignment: str = "l"  # l, ctr, r
    font_color: str = NAVY
    vertical_anchor: str = "t"  # t, ctr, b


@dataclass
class BackgroundSpec:
    """Background specification for a recipe."""
    color: str = WHITE


@dataclass
class LayoutRecipe:
    """A complete layout recipe with positioning for all elements."""
    name: str
    description: str = ""
    text_boxes: List[TextBoxSpec] = field(default_factory=list)
    chart_box: Optional[BoxPosition] = None
    background: BackgroundSpec = field(default_factory=BackgroundSpec)

    def box(self, name: str) -> Optional[TextBoxSpec]:
        """Return the text box with the given name, if the recipe has one."""
        for spec in self.text_boxes:
            if spec.name == name:
                return spec
        return None


# ============================================================
# SHARED BLOCKS
# ============================================================

def header_boxes() -> List[TextBoxSpec]:
    """Kicker, action title and tracker boxes shared by all content layouts."""
    return [
        TextBoxSpec(
            name="kicker",
            position=BoxPosition.from_inches(0.6, 0.35, 9.0, 0.35),
            font_size_pt=11,
            bold=True,
            font_color=TEAL,
        ),
        TextBoxSpec(
            name="title",
            position=BoxPosition.from_inches(0.6, 0.7, 10.6, 1.0),
            font_size_pt=24,
            bold=True,
        ),
        TextBoxSpec(
            name="tracker",
            position=BoxPosition.from_inches(10.4, 0.3, 2.3, 0.35),
            font_size_pt=10,
            alignment="r",
            font_color=SLATE,
        ),
    ]


FOOTER_TEXT = TextBoxSpec(
    name="footer",
    position=BoxPosition.from_inches(0.6, 7.0, 10.0, 0.3),
    font_size_pt=9,
    font_color=SLATE,
)

FOOTER_PAGE = TextBoxSpec(
    name="page_number",
    position=BoxPosition.from_inches(12.0, 7.0, 0.7, 0.3),
    font_size_pt=9,
    alignment="r",
    font_color=SLATE,
)

CONTENT_AREA = BoxPosition.from_inches(0.6, 1.9, 12.1, 4.9)

# Charts leave room for the source caption underneath.
CHART_AREA = BoxPosition.from_inches(0.6, 1.9, 12.1, 4.4)

CHART_SOURCE = TextBoxSpec(
    name="source",
    position=BoxPosition.from_inches(0.6, 6.4, 12.1, 0.35),
    font_size_pt=9,
    italic=True,
    alignment="r",
    font_color=SLATE,
)


# ============================================================
# BUILT-IN RECIPES
# ============================================================

def _build_recipes() -> Dict[str, LayoutRecipe]:
    """Build one recipe per slide layout."""
    recipes: Dict[str, LayoutRecipe] = {}

    recipes[SlideLayout.TITLE.value] = LayoutRecipe(
        name=SlideLayout.TITLE.value,
        description="Full-bleed cover with headline, subheading and confidentiality line",
        text_boxes=[
            TextBoxSpec(
                name="kicker",
                position=BoxPosition.from_inches(1.0, 1.8, 11.3, 0.5),
                font_size_pt=14,
                bold=True,
                font_color="5EEAD4",
            ),
            TextBoxSpec(
                name="title",
                position=BoxPosition.from_inches(1.0, 2.4, 11.3, 2.0),
                font_size_pt=40,
                bold=True,
                font_color=WHITE,
                vertical_anchor="ctr",
            ),
            TextBoxSpec(
                name="subtitle",
                position=BoxPosition.from_inches(1.0, 4.6, 11.3, 1.0),
                font_size_pt=20,
                font_color=LIGHT_SLATE,
            ),
            TextBoxSpec(
                name="confidential",
                position=BoxPosition.from_inches(1.0, 6.6, 6.0, 0.4),
                font_size_pt=10,
                font_color=LIGHT_SLATE,
            ),
        ],
        background=BackgroundSpec(color=NAVY),
    )

    recipes[SlideLayout.BULLET_POINTS.value] = LayoutRecipe(
        name=SlideLayout.BULLET_POINTS.value,
        description="Header block with a single bulleted body",
        text_boxes=header_boxes() + [
            TextBoxSpec(name="body", position=CONTENT_AREA, font_size_pt=18),
        ],
    )

    recipes[SlideLayout.TWO_COLUMN.value] = LayoutRecipe(
        name=SlideLayout.TWO_COLUMN.value,
        description="Header block with two labelled bullet columns",
        text_boxes=header_boxes() + [
            TextBoxSpec(
                name="left_label",
                position=BoxPosition.from_inches(0.6, 1.9, 5.8, 0.4),
                font_size_pt=12,
                bold=True,
                font_color=TEAL,
            ),
            TextBoxSpec(
                name="left_body",
                position=BoxPosition.from_inches(0.6, 2.4, 5.8, 4.4),
                font_size_pt=16,
            ),
            TextBoxSpec(
                name="right_label",
                position=BoxPosition.from_inches(6.9, 1.9, 5.8, 0.4),
                font_size_pt=12,
                bold=True,
                font_color=TEAL,
            ),
            TextBoxSpec(
                name="right_body",
                position=BoxPosition.from_inches(6.9, 2.4, 5.8, 4.4),
                font_size_pt=16,
            ),
        ],
    )

    recipes[SlideLayout.CHART_BAR.value] = LayoutRecipe(
        name=SlideLayout.CHART_BAR.value,
        description="Header block with a horizontal bar chart",
        text_boxes=header_boxes() + [CHART_SOURCE],
        chart_box=CHART_AREA,
    )

    recipes[SlideLayout.CHART_LINE.value] = LayoutRecipe(
        name=SlideLayout.CHART_LINE.value,
        description="Header block with a single-series line chart",
        text_boxes=header_boxes() + [CHART_SOURCE],
        chart_box=CHART_AREA,
    )

    recipes[SlideLayout.KPI_GRID.value] = LayoutRecipe(
        name=SlideLayout.KPI_GRID.value,
        description="Header block with a grid of KPI cards",
        text_boxes=header_boxes(),
        chart_box=CONTENT_AREA,
    )

    return recipes


# Global recipe registry
COOKBOOK: Dict[str, LayoutRecipe] = _build_recipes()

UNSUPPORTED_RECIPE = LayoutRecipe(
    name="UNSUPPORTED",
    description="Placeholder for layouts without a recipe",
    text_boxes=[
        TextBoxSpec(
            name="message",
            position=BoxPosition.from_inches(1.0, 3.0, 11.3, 1.5),
            font_size_pt=24,
            alignment="ctr",
            font_color=SLATE,
            vertical_anchor="ctr",
        ),
    ],
)


def get_recipe(name: str) -> Optional[LayoutRecipe]:
    """Get a layout recipe by layout name. Returns None if not found."""
    return COOKBOOK.get(str(getattr(name, "value", name)))


def list_recipes() -> List[str]:
    """Return all registered recipe names."""
    return list(COOKBOOK.keys())


def kpi_card_positions(count: int, columns: int = 3, area: BoxPosition = CONTENT_AREA) -> List[BoxPosition]:
    """Lay out `count` KPI cards in a grid filling `area`, row by row."""
    if count <= 0:
        return []
    columns = max(1, min(columns, count))
    rows = (count + columns - 1) // columns
    gap = int(0.3 * EMU_PER_INCH)
    card_w = (area.cx - gap * (columns - 1)) // columns
    card_h = min((area.cy - gap * (rows - 1)) // rows, int(2.2 * EMU_PER_INCH))

    positions = []
    for i in range(count):
        row, col = divmod(i, columns)
        positions.append(BoxPosition(
            x=area.x + col * (card_w + gap),
            y=area.y + row * (card_h + gap),
            cx=card_w,
            cy=card_h,
        ))
    return positions
