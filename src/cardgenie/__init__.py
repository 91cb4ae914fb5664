"""Spaced-repetition scheduling and lecture highlight scoring."""
