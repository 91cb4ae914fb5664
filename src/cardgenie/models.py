"""Data classes for cards, transcript chunks and highlights."""
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


def format_timestamp(seconds: float) -> str:
    """Render seconds as zero-padded MM:SS; negative or non-finite input is 00:00."""
    if not math.isfinite(seconds):
        return "00:00"
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


class ReviewRating(Enum):
    AGAIN = "again"
    GOOD = "good"
    EASY = "easy"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return {
            ReviewRating.AGAIN: "I didn't recall this. Show it again soon.",
            ReviewRating.GOOD: "I recalled it with effort. Normal interval.",
            ReviewRating.EASY: "Perfect recall! Extend the interval.",
        }[self]


class MasteryLevel(Enum):
    LEARNING = "Learning"
    DEVELOPING = "Developing"
    PROFICIENT = "Proficient"
    MASTERED = "Mastered"

    @classmethod
    def for_interval(cls, interval: int) -> "MasteryLevel":
        if interval >= 180:
            return cls.MASTERED
        elif interval >= 30:
            return cls.PROFICIENT
        elif interval >= 7:
            return cls.DEVELOPING
        return cls.LEARNING

    @property
    def color(self) -> str:
        return {
            MasteryLevel.LEARNING: "dark_orange",
            MasteryLevel.DEVELOPING: "blue",
            MasteryLevel.PROFICIENT: "magenta",
            MasteryLevel.MASTERED: "gold1",
        }[self]


@dataclass
class ReviewableCard:
    id: UUID = field(default_factory=uuid4)
    ease_factor: float = 2.5
    interval: int = 0
    next_review_date: Optional[datetime] = None
    review_count: int = 0
    correct_count: int = 0
    last_reviewed: Optional[datetime] = None
    source_highlight_id: Optional[UUID] = None

    @property
    def mastery_level(self) -> MasteryLevel:
        return MasteryLevel.for_interval(self.interval)

    @property
    def is_new(self) -> bool:
        return self.review_count == 0

    @property
    def success_rate(self) -> float:
        if self.review_count == 0:
            return 0.0
        return self.correct_count / self.review_count

    def is_due(self, now: datetime) -> bool:
        return self.next_review_date is None or self.next_review_date <= now


@dataclass(frozen=True)
class TimestampRange:
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def formatted(self) -> str:
        return f"{format_timestamp(self.start)} - {format_timestamp(self.end)}"


@dataclass(frozen=True)
class TranscriptChunk:
    text: str
    range: TimestampRange
    chunk_index: int = 0
    embedding: Optional[tuple[float, ...]] = None


class HighlightKind(Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"
    COLLABORATIVE = "collaborative"


@dataclass(frozen=True)
class HighlightCandidate:
    id: UUID
    start_time: float
    end_time: float
    excerpt: str
    summary: str
    confidence: float
    kind: HighlightKind
