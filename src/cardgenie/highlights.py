"""Heuristic highlight detection over live transcript chunks."""
import logging
import re
from typing import Optional
from uuid import uuid4

from cardgenie.config import HighlightConfig
from cardgenie.models import HighlightCandidate, HighlightKind, TranscriptChunk, format_timestamp

logger = logging.getLogger(__name__)

MANUAL_WINDOW_SECONDS = 8.0
MANUAL_CONFIDENCE = 0.9
COLLABORATIVE_CONFIDENCE = 0.8
EMPTY_SUMMARY = "New highlight"

_SENTENCE_END = re.compile(r"[.!?]")


class HighlightExtractor:
    """Scores transcript chunks and builds highlight candidates.

    Holds only its (frozen) configuration, so one instance can be shared
    across threads.
    """

    def __init__(self, config: Optional[HighlightConfig] = None):
        self.config = config or HighlightConfig()
        # Match keywords at a word start so "key" hits "keys" but not "monkey"
        self._keyword_patterns = [
            re.compile(r"\b" + re.escape(kw), re.IGNORECASE) for kw in self.config.keywords
        ]

    def score(self, text: str) -> float:
        """Confidence for a piece of text, before the acceptance threshold."""
        cfg = self.config
        keyword_hits = sum(1 for p in self._keyword_patterns if p.search(text))
        emphasis_hits = sum(1 for ch in text if ch in cfg.emphasis_chars)

        confidence = cfg.base_confidence
        confidence += min(keyword_hits, cfg.max_keyword_hits) * cfg.keyword_weight
        confidence += min(emphasis_hits, cfg.max_emphasis_hits) * cfg.emphasis_weight
        if len(text) > cfg.long_text_length:
            confidence += cfg.length_bonus
        return round(min(max(confidence, 0.0), cfg.confidence_cap), 2)

    def evaluate(self, chunk: TranscriptChunk) -> Optional[HighlightCandidate]:
        """Return an automatic highlight for the chunk, or None if it lacks signal."""
        text = chunk.text.strip()
        if len(text) <= self.config.min_length:
            logger.debug("Chunk %d rejected: too short (%d chars)", chunk.chunk_index, len(text))
            return None

        confidence = self.score(text)
        if confidence <= self.config.acceptance_threshold:
            logger.debug("Chunk %d rejected: confidence %.2f", chunk.chunk_index, confidence)
            return None

        return HighlightCandidate(
            id=uuid4(),
            start_time=chunk.range.start,
            end_time=chunk.range.end,
            excerpt=text,
            summary=self.summarize(text),
            confidence=confidence,
            kind=HighlightKind.AUTOMATIC,
        )

    def manual_highlight(self, transcript: str, timestamp: float) -> HighlightCandidate:
        excerpt = transcript if transcript else f"Highlight at {format_timestamp(timestamp)}"
        return HighlightCandidate(
            id=uuid4(),
            start_time=timestamp,
            end_time=timestamp + MANUAL_WINDOW_SECONDS,
            excerpt=excerpt,
            summary=self.summarize(excerpt),
            confidence=MANUAL_CONFIDENCE,
            kind=HighlightKind.MANUAL,
        )

    def collaborative_highlight(
        self, excerpt: str, start: float, end: float, author: Optional[str] = None
    ) -> HighlightCandidate:
        return HighlightCandidate(
            id=uuid4(),
            start_time=start,
            end_time=end,
            excerpt=excerpt,
            summary=self.summarize(excerpt, author=author),
            confidence=COLLABORATIVE_CONFIDENCE,
            kind=HighlightKind.COLLABORATIVE,
        )

    def summarize(self, text: str, author: Optional[str] = None) -> str:
        """First sentence of the text, optionally prefixed with the author."""
        trimmed = text.strip()
        if not trimmed:
            summary = EMPTY_SUMMARY
        else:
            first = next((s.strip() for s in _SENTENCE_END.split(trimmed) if s.strip()), "")
            summary = (first or trimmed)[: self.config.summary_max_length].strip()
        if author and author.strip():
            return f"{author.strip()}: {summary}"
        return summary
