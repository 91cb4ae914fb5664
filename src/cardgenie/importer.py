"""Load transcript chunks and card snapshots from files."""
import json
from datetime import datetime
from pathlib import Path
from uuid import UUID

from cardgenie.models import ReviewableCard, TimestampRange, TranscriptChunk

# Seconds assigned to each line of a plain-text transcript
TEXT_LINE_SECONDS = 10.0


def _parse_datetime(value):
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    # Queue checks compare against naive local time
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _parse_uuid(value):
    return UUID(str(value)) if value else None


def _parse_days(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"interval {value!r} is not a number of days")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"interval {value!r} is not a whole number of days")
    return int(value)


def read_transcript(file_path: str) -> list[TranscriptChunk]:
    """Read chunks from a JSON list or a plain-text file (one chunk per line)."""
    path = Path(file_path)
    if path.suffix.lower() == ".json":
        records = json.loads(path.read_text())
        if not isinstance(records, list):
            raise ValueError(f"{path.name}: expected a JSON list of chunks")
        chunks = []
        for i, rec in enumerate(records):
            try:
                if not isinstance(rec["text"], str):
                    raise TypeError(f"text must be a string, got {type(rec['text']).__name__}")
                embedding = rec.get("embedding")
                chunks.append(TranscriptChunk(
                    text=rec["text"],
                    range=TimestampRange(float(rec["start"]), float(rec["end"])),
                    chunk_index=int(rec.get("index", i)),
                    embedding=tuple(float(x) for x in embedding) if embedding else None,
                ))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise ValueError(f"{path.name}: malformed chunk #{i}: {e}") from e
        return chunks

    lines = [line.strip() for line in path.read_text().splitlines() if line.strip()]
    return [
        TranscriptChunk(
            text=line,
            range=TimestampRange(i * TEXT_LINE_SECONDS, (i + 1) * TEXT_LINE_SECONDS),
            chunk_index=i,
        )
        for i, line in enumerate(lines)
    ]


def read_cards(file_path: str) -> list[ReviewableCard]:
    """Read card snapshots from a JSON list of objects with ISO datetimes."""
    path = Path(file_path)
    records = json.loads(path.read_text())
    if not isinstance(records, list):
        raise ValueError(f"{path.name}: expected a JSON list of cards")
    cards = []
    for i, rec in enumerate(records):
        try:
            card = ReviewableCard(
                ease_factor=float(rec.get("ease_factor", 2.5)),
                interval=_parse_days(rec.get("interval", 0)),
                next_review_date=_parse_datetime(rec.get("next_review_date")),
                review_count=int(rec.get("review_count", 0)),
                correct_count=int(rec.get("correct_count", 0)),
                last_reviewed=_parse_datetime(rec.get("last_reviewed")),
                source_highlight_id=_parse_uuid(rec.get("source_highlight_id")),
            )
            if rec.get("id"):
                card.id = UUID(str(rec["id"]))
        except (TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"{path.name}: malformed card #{i}: {e}") from e
        cards.append(card)
    return cards
