"""
Command Line Interface for Storyboard Toolkit

Provides the `storyboard` entry point with commands:
- deck:        Synthesize a slide deck from files and an objective
- infographic: Synthesize a single infographic image
- show:        Render one slide of an exported deck
- present:     Step through an exported deck interactively
- export:      Write an exported deck to PowerPoint
- validate:    Check an exported deck against the JSON Schema
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .attachments import collect_attachments
from .config import SynthesisConfig, load_config
from .errors import StoryboardError
from .export import DEFAULT_DECK_FILENAME, load_deck, save_deck, validate_deck_json
from .infographic import DEFAULT_INFOGRAPHIC_FILENAME, save_infographic
from .logging_utils import setup_logging
from .navigator import NEXT_KEY, PREVIOUS_KEY, DeckNavigator
from .pptx_render import render_deck_to_pptx
from .renderer import render_slide
from .service import GeminiService, GenerationService
from .session import GenerationMode, SessionStatus, SynthesisSession

logger = logging.getLogger(__name__)

PRESENT_KEYS = {
    "n": NEXT_KEY,
    "": NEXT_KEY,
    "p": PREVIOUS_KEY,
    "b": PREVIOUS_KEY,
}


def make_service(config: SynthesisConfig) -> GenerationService:
    """Create the generation service used by the synthesis commands."""
    return GeminiService(config)


def _print_banner(title: str) -> None:
    print("=" * 60)
    print(title)
    print("=" * 60)


def _print_error(exc: BaseException, verbose: bool) -> None:
    print(f"\nError: {exc}")
    if verbose:
        import traceback
        traceback.print_exc()


def _run_session(args: argparse.Namespace, mode: GenerationMode) -> SynthesisSession:
    config = load_config(args.config)
    files, warnings = collect_attachments(args.files, max_bytes=config.max_file_bytes)
    for warning in warnings:
        print(f"Warning: {warning}")
    print(f"Attachments: {len(files)}")

    session = SynthesisSession(make_service(config), config=config, mode=mode)
    session.generate(files, args.prompt or "")
    return session


def _report_failure(session: SynthesisSession, verbose: bool) -> int:
    print(f"\nError: {session.error_message}")
    if verbose and session.last_error is not None:
        print(f"Cause: {session.last_error}")
    return 1


def deck_command(args: argparse.Namespace) -> int:
    """Execute deck command."""
    _print_banner("Deck Synthesis")

    try:
        session = _run_session(args, GenerationMode.DECK)
        if session.status != SessionStatus.COMPLETE:
            return _report_failure(session, args.verbose)

        deck = session.deck
        print(f"Deck: {deck.title or '(untitled)'} ({len(deck.slides)} slides)")
        path = save_deck(deck, args.output)
        print(f"Saved deck to: {path}")

        if args.pptx:
            pptx_path = render_deck_to_pptx(deck, args.pptx)
            print(f"Saved PowerPoint to: {pptx_path}")
        return 0

    except (StoryboardError, OSError) as e:
        _print_error(e, args.verbose)
        return 1


def infographic_command(args: argparse.Namespace) -> int:
    """Execute infographic command."""
    _print_banner("Infographic Synthesis")

    try:
        session = _run_session(args, GenerationMode.INFOGRAPHIC)
        if session.status != SessionStatus.COMPLETE:
            return _report_failure(session, args.verbose)

        result = session.infographic
        if args.verbose:
            print(f"Brief: {result.brief}")
        path = save_infographic(result, args.output)
        print(f"Saved infographic to: {path}")
        return 0

    except (StoryboardError, OSError) as e:
        _print_error(e, args.verbose)
        return 1


def show_command(args: argparse.Namespace) -> int:
    """Execute show command."""
    try:
        deck = load_deck(args.deck)
        index = args.slide - 1
        view = render_slide(deck, index)

        if args.json:
            print(json.dumps(view.to_dict(), indent=2, ensure_ascii=False))
        else:
            print(f"--- Slide {args.slide}/{len(deck.slides)} [{view.layout}] ---")
            print("\n".join(view.text_lines()))
        return 0

    except IndexError:
        print(f"\nError: slide {args.slide} does not exist")
        return 1
    except (StoryboardError, OSError) as e:
        _print_error(e, args.verbose)
        return 1


def present_command(args: argparse.Namespace) -> int:
    """Execute present command."""
    try:
        deck = load_deck(args.deck)
    except (StoryboardError, OSError) as e:
        _print_error(e, args.verbose)
        return 1

    navigator = DeckNavigator(deck)
    print("Keys: [n]ext / Enter, [p]revious, [q]uit")
    while True:
        view = navigator.current_view()
        print()
        print(f"--- Slide {navigator.index + 1}/{navigator.slide_count} [{view.layout}] ---")
        print("\n".join(view.text_lines()))
        try:
            choice = input("> ").strip().lower()
        except EOFError:
            return 0
        if choice == "q":
            return 0
        key = PRESENT_KEYS.get(choice)
        if key is None or not navigator.handle_key(key):
            print(f"Unknown key: {choice!r}")


def export_command(args: argparse.Namespace) -> int:
    """Execute export command."""
    _print_banner("PowerPoint Export")

    try:
        deck = load_deck(args.deck)
        path = render_deck_to_pptx(deck, args.output)
        print(f"Wrote {len(deck.slides)} slides to: {path}")
        return 0

    except (StoryboardError, OSError) as e:
        _print_error(e, args.verbose)
        return 1


def validate_command(args: argparse.Namespace) -> int:
    """Execute validate command."""
    errors = validate_deck_json(args.deck)
    if errors:
        print(f"{args.deck}: {len(errors)} problem(s)")
        for error in errors:
            print(f"  - {error}")
        return 1
    print(f"{args.deck}: valid")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='storyboard',
        description='Storyboard Toolkit - Synthesize executive decks and infographics from source material',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s deck report.pdf metrics.csv --prompt "Board update on Q3 growth" --pptx deck.pptx
  %(prog)s infographic report.pdf --prompt "One-page summary of the market entry case"
  %(prog)s show presentation.json --slide 2
  %(prog)s present presentation.json
  %(prog)s export presentation.json deck.pptx
  %(prog)s validate presentation.json
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')
    parser.add_argument('--config', '-c', help='Settings file (YAML/JSON)')
    parser.add_argument('--log-file', type=Path, help='Also write logs to this file')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Deck command
    deck_parser = subparsers.add_parser('deck', help='Synthesize a slide deck')
    deck_parser.add_argument('files', nargs='*', help='Source files to attach (max 5MB each)')
    deck_parser.add_argument('--prompt', '-p', default='', help='Objective for the deck')
    deck_parser.add_argument('--output', '-o', default=DEFAULT_DECK_FILENAME, help='Output deck JSON')
    deck_parser.add_argument('--pptx', metavar='PATH', help='Also write a PowerPoint file')

    # Infographic command
    info_parser = subparsers.add_parser('infographic', help='Synthesize an infographic image')
    info_parser.add_argument('files', nargs='*', help='Source files to attach (max 5MB each)')
    info_parser.add_argument('--prompt', '-p', default='', help='Objective for the infographic')
    info_parser.add_argument('--output', '-o', default=DEFAULT_INFOGRAPHIC_FILENAME, help='Output image file')

    # Show command
    show_parser = subparsers.add_parser('show', help='Render one slide of an exported deck')
    show_parser.add_argument('deck', help='Deck JSON file')
    show_parser.add_argument('--slide', '-s', type=int, default=1, help='1-based slide number')
    show_parser.add_argument('--json', action='store_true', help='Output the slide view as JSON')

    # Present command
    present_parser = subparsers.add_parser('present', help='Step through an exported deck')
    present_parser.add_argument('deck', help='Deck JSON file')

    # Export command
    export_parser = subparsers.add_parser('export', help='Write an exported deck to PowerPoint')
    export_parser.add_argument('deck', help='Deck JSON file')
    export_parser.add_argument('output', help='Output PPTX file')

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Validate a deck JSON file')
    validate_parser.add_argument('deck', help='Deck JSON file')

    return parser


COMMANDS = {
    'deck': deck_command,
    'infographic': infographic_command,
    'show': show_command,
    'present': present_command,
    'export': export_command,
    'validate': validate_command,
}


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(verbose=args.verbose, log_path=args.log_file)
    return COMMANDS[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
