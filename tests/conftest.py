from datetime import datetime

import pytest

from cardgenie.highlights import HighlightExtractor
from cardgenie.models import TimestampRange, TranscriptChunk


@pytest.fixture
def now():
    """A fixed review instant so scheduling is deterministic."""
    return datetime(2025, 3, 1, 9, 0, 0)


@pytest.fixture
def extractor():
    return HighlightExtractor()


@pytest.fixture
def make_chunk():
    def _make(text, start=0.0, end=10.0, index=0):
        return TranscriptChunk(text=text, range=TimestampRange(start, end), chunk_index=index)
    return _make
