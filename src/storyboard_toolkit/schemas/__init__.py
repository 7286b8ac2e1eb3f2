"""JSON Schema definitions for Storyboard Toolkit."""

from pathlib import Path

SCHEMA_DIR = Path(__file__).parent


def get_deck_schema_path() -> Path:
    """Return the path to the deck.schema.json file."""
    return SCHEMA_DIR / "deck.schema.json"
