"""SM-2 spaced repetition scheduling with Again/Good/Easy ratings."""
import logging
import math
from dataclasses import replace
from datetime import datetime, timedelta

from cardgenie.models import ReviewableCard, ReviewRating

logger = logging.getLogger(__name__)

MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 3.0
AGAIN_EASE_PENALTY = 0.2
EASY_EASE_BONUS = 0.15
EASY_INTERVAL_BONUS = 1.3
EASY_MIN_INTERVAL = 4
FIRST_INTERVAL = 1
SECOND_INTERVAL = 6
# 100 years; keeps next_review_date within datetime range
MAX_INTERVAL = 36500


class InvalidCardState(ValueError):
    """Raised when a card's scheduling fields break their invariants."""

    def __init__(self, card_id, reason: str):
        self.card_id = card_id
        self.reason = reason
        super().__init__(f"Card {card_id} has invalid scheduling state: {reason}")


def validate_card(card: ReviewableCard) -> None:
    """Raise InvalidCardState if the card cannot be scheduled as-is."""
    reason = None
    if not MIN_EASE_FACTOR <= card.ease_factor <= MAX_EASE_FACTOR:
        reason = f"ease_factor {card.ease_factor} outside [{MIN_EASE_FACTOR}, {MAX_EASE_FACTOR}]"
    elif not isinstance(card.interval, int) or isinstance(card.interval, bool):
        reason = f"interval {card.interval!r} is not a whole number of days"
    elif card.interval < 0:
        reason = f"interval {card.interval} is negative"
    elif card.review_count < 0 or card.correct_count < 0:
        reason = "review counters are negative"
    elif card.correct_count > card.review_count:
        reason = f"correct_count {card.correct_count} exceeds review_count {card.review_count}"
    if reason:
        logger.warning("Rejecting card %s: %s", card.id, reason)
        raise InvalidCardState(card.id, reason)


def _clamp_ease(ease_factor: float) -> float:
    return round(min(MAX_EASE_FACTOR, max(MIN_EASE_FACTOR, ease_factor)), 2)


def _next_state(interval: int, ease_factor: float, rating: ReviewRating) -> tuple[int, float]:
    new_interval, new_ease = _apply_rating(interval, ease_factor, rating)
    return min(new_interval, MAX_INTERVAL), new_ease


def _apply_rating(interval: int, ease_factor: float, rating: ReviewRating) -> tuple[int, float]:
    if rating is ReviewRating.AGAIN:
        return 0, _clamp_ease(ease_factor - AGAIN_EASE_PENALTY)
    if rating is ReviewRating.GOOD:
        if interval == 0:
            new_interval = FIRST_INTERVAL
        elif interval == 1:
            new_interval = SECOND_INTERVAL
        else:
            new_interval = math.floor(interval * ease_factor)
        return new_interval, _clamp_ease(ease_factor)
    # Easy
    new_interval = max(EASY_MIN_INTERVAL, math.floor(interval * ease_factor * EASY_INTERVAL_BONUS))
    return new_interval, _clamp_ease(ease_factor + EASY_EASE_BONUS)


def preview_interval(card: ReviewableCard, rating: ReviewRating) -> int:
    """Interval in days that the rating would produce, without changing the card."""
    validate_card(card)
    interval, _ = _next_state(card.interval, card.ease_factor, rating)
    return interval


def schedule_next(card: ReviewableCard, rating: ReviewRating, now: datetime) -> ReviewableCard:
    """Apply a review rating and return the updated card.

    Args:
        card: Current card snapshot; ease factor must be within [1.3, 3.0]
            and interval non-negative.
        rating: The learner's self-assessment.
        now: Review instant. The next review date is ``now + interval`` days,
            so an interval of 0 means due immediately.

    Returns:
        A new ReviewableCard; the input card is left untouched.

    Raises:
        InvalidCardState: if the incoming card breaks its invariants.
    """
    validate_card(card)
    interval, ease_factor = _next_state(card.interval, card.ease_factor, rating)
    correct = 0 if rating is ReviewRating.AGAIN else 1
    updated = replace(
        card,
        interval=interval,
        ease_factor=ease_factor,
        review_count=card.review_count + 1,
        correct_count=card.correct_count + correct,
        next_review_date=now + timedelta(days=interval),
        last_reviewed=now,
    )
    logger.debug(
        "Scheduled card %s (%s): interval %d -> %d, ease %.2f -> %.2f",
        card.id, rating.value, card.interval, interval, card.ease_factor, ease_factor,
    )
    return updated
