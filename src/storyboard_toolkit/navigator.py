"""Slide navigation: a saturating cursor over an accepted deck."""

from datetime import date
from typing import Dict, Optional

from .renderer import render_slide
from .schema import Deck
from .views import SlideView

NEXT_KEY = "ArrowRight"
PREVIOUS_KEY = "ArrowLeft"


class DeckNavigator:
    """Cursor over a deck's slides.

    The index always stays in [0, len(slides) - 1]; moving past either end
    is a no-op. The deck itself is never modified.
    """

    def __init__(self, deck: Deck) -> None:
        self.deck = deck
        self._index = 0
        self._key_bindings: Dict[str, str] = {
            NEXT_KEY: "next",
            PREVIOUS_KEY: "previous",
        }

    @property
    def index(self) -> int:
        return self._index

    @property
    def slide_count(self) -> int:
        return len(self.deck.slides)

    @property
    def at_start(self) -> bool:
        return self._index == 0

    @property
    def at_end(self) -> bool:
        return self._index == self.slide_count - 1

    def next(self) -> int:
        self._index = min(self._index + 1, self.slide_count - 1)
        return self._index

    def previous(self) -> int:
        self._index = max(self._index - 1, 0)
        return self._index

    def handle_key(self, key: str) -> bool:
        """Apply a directional key. Returns False for keys with no binding."""
        action = self._key_bindings.get(key)
        if action is None:
            return False
        getattr(self, action)()
        return True

    def current_view(self, today: Optional[date] = None) -> SlideView:
        return render_slide(self.deck, self._index, today=today)
