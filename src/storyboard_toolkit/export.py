"""
Deck Export

Serializes an accepted deck verbatim, including slides not on screen and
speaker notes, to a portable JSON document, and reads it back.
"""

import json
from pathlib import Path
from typing import List, Union

import jsonschema

from .acceptor import accept_deck
from .schema import Deck
from .schemas import get_deck_schema_path

DEFAULT_DECK_FILENAME = "presentation.json"


# ============================================================
# SERIALIZATION
# ============================================================

def deck_to_json(deck: Deck) -> str:
    """Return the deck as pretty-printed camelCase JSON."""
    return json.dumps(deck.to_dict(), indent=2, ensure_ascii=False)


def save_deck(deck: Deck, path: Union[str, Path] = DEFAULT_DECK_FILENAME) -> Path:
    """Save a deck to a JSON file and return the path."""
    path = Path(path)
    if path.is_dir():
        path = path / DEFAULT_DECK_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(deck_to_json(deck) + "\n", encoding="utf-8")
    return path


def load_deck(path: Union[str, Path]) -> Deck:
    """Load a deck from a JSON file.

    The file goes through the same acceptance checks as a generation
    response, so a hand-edited export cannot produce an invalid deck.
    """
    path = Path(path)
    return accept_deck(path.read_text(encoding="utf-8"))


# ============================================================
# VALIDATION
# ============================================================

def validate_deck_json(path: Union[str, Path]) -> List[str]:
    """Validate an exported deck file and return a list of error strings.

    Returns an empty list when the document is valid.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        return [f"Invalid JSON: {exc}"]
    except FileNotFoundError:
        return [f"File not found: {path}"]

    with open(get_deck_schema_path(), "r", encoding="utf-8") as f:
        schema = json.load(f)

    errors: List[str] = []
    validator = jsonschema.Draft202012Validator(schema)
    for error in validator.iter_errors(data):
        json_path = " -> ".join(str(p) for p in error.absolute_path) if error.absolute_path else "(root)"
        errors.append(f"{json_path}: {error.message}")
    return errors
