"""Review queue selection over card snapshots supplied by the card store."""
import random
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from cardgenie.models import ReviewableCard


def _due_sort_key(card: ReviewableCard):
    # Never-scheduled cards first, then oldest due date.
    return (card.next_review_date is not None, card.next_review_date or datetime.min)


def get_due_cards(
    cards: Iterable[ReviewableCard], now: datetime, limit: Optional[int] = None
) -> list[ReviewableCard]:
    due = sorted((c for c in cards if c.is_due(now)), key=_due_sort_key)
    return due if limit is None else due[:limit]


def get_new_cards(cards: Iterable[ReviewableCard], limit: Optional[int] = None) -> list[ReviewableCard]:
    new = [c for c in cards if c.is_new]
    return new if limit is None else new[:limit]


def build_study_session(
    cards: Iterable[ReviewableCard],
    now: datetime,
    max_new: int = 5,
    max_review: int = 20,
    rng: Optional[random.Random] = None,
) -> list[ReviewableCard]:
    """Mix up to max_new unseen cards with up to max_review due cards, shuffled."""
    cards = list(cards)
    session = get_new_cards(cards, limit=max_new)
    reviews = [c for c in get_due_cards(cards, now) if not c.is_new]
    session.extend(reviews[:max_review])
    (rng or random.Random()).shuffle(session)
    return session


def estimate_daily_study_minutes(
    cards: Iterable[ReviewableCard], now: datetime, seconds_per_card: int = 30
) -> int:
    return len(get_due_cards(cards, now)) * seconds_per_card // 60


def get_set_statistics(cards: Iterable[ReviewableCard], now: datetime) -> dict:
    cards = list(cards)
    if not cards:
        return {
            "total_cards": 0,
            "due_cards": 0,
            "new_cards": 0,
            "average_success_rate": 0.0,
            "total_reviews": 0,
        }
    return {
        "total_cards": len(cards),
        "due_cards": sum(1 for c in cards if c.is_due(now)),
        "new_cards": sum(1 for c in cards if c.is_new),
        "average_success_rate": sum(c.success_rate for c in cards) / len(cards),
        "total_reviews": sum(c.review_count for c in cards),
    }


def index_cards_by_highlight(cards: Iterable[ReviewableCard]) -> dict[UUID, list[ReviewableCard]]:
    """Reverse lookup from source highlight id to the cards built from it."""
    index = defaultdict(list)
    for card in cards:
        if card.source_highlight_id is not None:
            index[card.source_highlight_id].append(card)
    return dict(index)
