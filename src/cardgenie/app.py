"""Command-line reports for highlight scoring and deck mastery."""
import argparse
import logging
import sys
from datetime import datetime

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cardgenie.config import load_config
from cardgenie.flashcards import estimate_daily_study_minutes, get_due_cards
from cardgenie.highlights import HighlightExtractor, format_timestamp
from cardgenie.importer import read_cards, read_transcript
from cardgenie.mastery import compute_mastery, level_breakdown, readiness_color, readiness_label
from cardgenie.models import ReviewRating
from cardgenie.sm2 import InvalidCardState, preview_interval

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: int = 0) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def cmd_highlights(args, highlight_config, mastery_config) -> int:
    extractor = HighlightExtractor(highlight_config)
    chunks = read_transcript(args.file)
    logger.info("Loaded %d chunks from %s", len(chunks), args.file)
    candidates = [c for c in (extractor.evaluate(chunk) for chunk in chunks) if c]
    if not candidates:
        console.print(f"[yellow]No highlights found in {len(chunks)} chunks.[/yellow]")
        return 0
    table = Table(title=f"Highlights ({len(candidates)}/{len(chunks)} chunks)")
    table.add_column("Time", style="cyan")
    table.add_column("Confidence", justify="right")
    table.add_column("Summary")
    for c in candidates:
        table.add_row(
            f"{format_timestamp(c.start_time)} - {format_timestamp(c.end_time)}",
            f"{c.confidence:.2f}",
            escape(c.summary),
        )
    console.print(table)
    return 0


def cmd_mastery(args, highlight_config, mastery_config) -> int:
    cards = read_cards(args.file)
    logger.info("Loaded %d cards from %s", len(cards), args.file)
    target = args.target if args.target is not None else mastery_config.target_percent
    now = datetime.now()
    score = compute_mastery(cards, target, ceiling_days=mastery_config.ceiling_days)
    label = readiness_label(score, target)
    color = readiness_color(score, target)

    console.print(Panel(f"[bold]{len(cards)} cards[/bold]", title="Deck Mastery", border_style="blue"))
    bar_filled = int(score / 5)
    bar = f"[{color}]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/{color}]"
    console.print(f"\n  Mastery: [bold]{score}%[/bold] of {target}% {bar} [{color}]{label}[/{color}]\n")

    table = Table(title="Mastery Levels")
    table.add_column("Level")
    table.add_column("Cards", justify="right")
    for level, count in level_breakdown(cards).items():
        table.add_row(f"[{level.color}]{level.value}[/{level.color}]", str(count))
    console.print(table)

    due = get_due_cards(cards, now)
    minutes = estimate_daily_study_minutes(cards, now)
    console.print(f"\n  Due now: [bold]{len(due)}[/bold]  |  Estimated review time: [bold]{minutes} min[/bold]")
    return 0


def cmd_preview(args, highlight_config, mastery_config) -> int:
    cards = read_cards(args.file)
    logger.info("Loaded %d cards from %s", len(cards), args.file)
    table = Table(title="Next Interval by Rating")
    table.add_column("Card", style="cyan")
    table.add_column("Interval", justify="right")
    table.add_column("Ease", justify="right")
    for rating in ReviewRating:
        table.add_column(rating.display_name, justify="right")
    for card in cards:
        previews = [f"{preview_interval(card, r)}d" for r in ReviewRating]
        table.add_row(str(card.id)[:8], f"{card.interval}d", f"{card.ease_factor:.2f}", *previews)
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cardgenie", description="Highlight and review scheduling reports")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("highlights", help="Score a transcript and list highlight candidates")
    p.add_argument("file", help="Transcript as JSON chunks or plain text")
    p.set_defaults(func=cmd_highlights)

    p = sub.add_parser("mastery", help="Deck mastery and readiness")
    p.add_argument("file", help="Cards as a JSON list")
    p.add_argument("--target", type=float, default=None, help="Target mastery percent")
    p.set_defaults(func=cmd_mastery)

    p = sub.add_parser("preview", help="Preview next intervals for each rating")
    p.add_argument("file", help="Cards as a JSON list")
    p.set_defaults(func=cmd_preview)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        highlight_config, mastery_config = load_config()
        return args.func(args, highlight_config, mastery_config)
    except InvalidCardState as e:
        console.print(f"[red]Data integrity warning: {escape(str(e))}[/red]")
        return 1
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red]\n{escape(str(e))}")
        return 2
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 2


if __name__ == "__main__":
    sys.exit(main())
