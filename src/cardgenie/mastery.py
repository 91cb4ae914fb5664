"""Deck mastery scoring and readiness labels."""
import logging
from collections import Counter
from typing import Iterable

from cardgenie.models import MasteryLevel, ReviewableCard
from cardgenie.sm2 import validate_card

logger = logging.getLogger(__name__)

DEFAULT_CEILING_DAYS = 180
DEFAULT_TARGET_PERCENT = 85.0
ON_TRACK_RATIO = 0.9


def compute_mastery(
    cards: Iterable[ReviewableCard],
    target_mastery_percent: float = DEFAULT_TARGET_PERCENT,
    ceiling_days: int = DEFAULT_CEILING_DAYS,
) -> float:
    """Interval-weighted mastery of a deck, 0-100.

    Each card contributes min(interval, ceiling_days) / ceiling_days, so a card
    counts as fully mastered once its interval reaches the Mastered band
    (180 days by default). The deck score is the mean contribution times 100.

    The target does not change the score; it is validated and logged so a
    study plan can compare against it (see is_on_track).
    """
    if not 0 <= target_mastery_percent <= 100:
        raise ValueError(f"target_mastery_percent must be within [0, 100], got {target_mastery_percent}")
    if ceiling_days <= 0:
        raise ValueError(f"ceiling_days must be positive, got {ceiling_days}")
    total = 0
    count = 0
    for card in cards:
        validate_card(card)
        total += min(card.interval, ceiling_days)
        count += 1
    if count == 0:
        return 0.0
    score = round(100 * total / (ceiling_days * count), 1)
    logger.debug("Mastery %.1f%% over %d cards (target %.1f%%)", score, count, target_mastery_percent)
    return score


def is_on_track(current: float, target: float) -> bool:
    return current >= target * ON_TRACK_RATIO


def readiness_label(current: float, target: float = DEFAULT_TARGET_PERCENT) -> str:
    if current >= target:
        return "READY"
    elif is_on_track(current, target):
        return "ON TRACK"
    elif current >= target * 0.5:
        return "NEEDS WORK"
    return "NOT READY"


def readiness_color(current: float, target: float = DEFAULT_TARGET_PERCENT) -> str:
    return {
        "READY": "green",
        "ON TRACK": "yellow",
        "NEEDS WORK": "dark_orange",
        "NOT READY": "red",
    }[readiness_label(current, target)]


def level_breakdown(cards: Iterable[ReviewableCard]) -> dict[MasteryLevel, int]:
    """Count cards per mastery level; every level is present in the result."""
    counts = Counter(card.mastery_level for card in cards)
    return {level: counts.get(level, 0) for level in MasteryLevel}
