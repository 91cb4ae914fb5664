# tests/test_sm2.py
import random
from datetime import timedelta

import pytest

from cardgenie.models import ReviewableCard, ReviewRating
from cardgenie.sm2 import InvalidCardState, preview_interval, schedule_next, validate_card


def test_good_first_review(now):
    """New card rated Good: interval=1."""
    card = schedule_next(ReviewableCard(), ReviewRating.GOOD, now)
    assert card.interval == 1
    assert card.ease_factor == 2.5
    assert card.next_review_date == now + timedelta(days=1)


def test_good_second_review(now):
    card = schedule_next(ReviewableCard(interval=1), ReviewRating.GOOD, now)
    assert card.interval == 6


def test_good_later_review_uses_floor(now):
    card = schedule_next(ReviewableCard(interval=6, ease_factor=2.5), ReviewRating.GOOD, now)
    assert card.interval == 15
    card = schedule_next(ReviewableCard(interval=7, ease_factor=2.5), ReviewRating.GOOD, now)
    assert card.interval == 17  # floor(17.5)


def test_again_resets_interval(now):
    card = schedule_next(ReviewableCard(interval=120, ease_factor=2.5), ReviewRating.AGAIN, now)
    assert card.interval == 0
    assert card.ease_factor == 2.3
    assert card.next_review_date == now


def test_again_ease_floor(now):
    card = schedule_next(ReviewableCard(ease_factor=1.3), ReviewRating.AGAIN, now)
    assert card.ease_factor == 1.3
    card = schedule_next(ReviewableCard(ease_factor=1.4), ReviewRating.AGAIN, now)
    assert card.ease_factor == 1.3


def test_easy_minimum_interval(now):
    card = schedule_next(ReviewableCard(interval=0), ReviewRating.EASY, now)
    assert card.interval == 4
    card = schedule_next(ReviewableCard(interval=1, ease_factor=1.3), ReviewRating.EASY, now)
    assert card.interval == 4


def test_easy_extends_interval_and_ease(now):
    card = schedule_next(ReviewableCard(interval=10, ease_factor=2.5), ReviewRating.EASY, now)
    assert card.interval == 32  # floor(10 * 2.5 * 1.3)
    assert card.ease_factor == 2.65


def test_easy_ease_cap(now):
    card = schedule_next(ReviewableCard(interval=10, ease_factor=2.9), ReviewRating.EASY, now)
    assert card.ease_factor == 3.0
    card = schedule_next(card, ReviewRating.EASY, now)
    assert card.ease_factor == 3.0


def test_counters(now):
    card = ReviewableCard()
    card = schedule_next(card, ReviewRating.GOOD, now)
    card = schedule_next(card, ReviewRating.AGAIN, now)
    card = schedule_next(card, ReviewRating.EASY, now)
    assert card.review_count == 3
    assert card.correct_count == 2
    assert card.last_reviewed == now


def test_schedule_next_does_not_mutate_input(now):
    card = ReviewableCard(interval=6)
    updated = schedule_next(card, ReviewRating.GOOD, now)
    assert card.interval == 6
    assert card.review_count == 0
    assert updated is not card
    assert updated.id == card.id


def test_round_trip_scenario(now):
    card = ReviewableCard(ease_factor=2.5, interval=0)
    card = schedule_next(card, ReviewRating.GOOD, now)
    assert card.interval == 1
    card = schedule_next(card, ReviewRating.GOOD, now)
    assert card.interval == 6
    card = schedule_next(card, ReviewRating.AGAIN, now)
    assert (card.interval, card.ease_factor) == (0, 2.3)
    card = schedule_next(card, ReviewRating.EASY, now)
    assert (card.interval, card.ease_factor) == (4, 2.45)


def test_ease_bounds_hold_over_random_sequences(now):
    rng = random.Random(42)
    ratings = list(ReviewRating)
    for _ in range(50):
        card = ReviewableCard()
        for _ in range(40):
            card = schedule_next(card, rng.choice(ratings), now)
            assert 1.3 <= card.ease_factor <= 3.0
            assert card.interval >= 0


@pytest.mark.parametrize("card", [
    ReviewableCard(ease_factor=1.2),
    ReviewableCard(ease_factor=3.1),
    ReviewableCard(interval=-1),
    ReviewableCard(review_count=1, correct_count=2),
    ReviewableCard(review_count=-1),
    ReviewableCard(interval=2.5),
    ReviewableCard(interval=True),
])
def test_invalid_card_rejected(card, now):
    with pytest.raises(InvalidCardState) as exc:
        schedule_next(card, ReviewRating.GOOD, now)
    assert exc.value.card_id == card.id


def test_invalid_card_state_is_value_error():
    with pytest.raises(ValueError):
        validate_card(ReviewableCard(ease_factor=0.5))


def test_preview_interval_matches_schedule(now):
    card = ReviewableCard(interval=6, ease_factor=2.5)
    for rating in ReviewRating:
        assert preview_interval(card, rating) == schedule_next(card, rating, now).interval
    assert card.review_count == 0


def test_interval_capped_at_max(now):
    card = schedule_next(ReviewableCard(interval=30000, ease_factor=3.0), ReviewRating.EASY, now)
    assert card.interval == 36500
