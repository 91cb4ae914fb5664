import json

import pytest

from cardgenie.app import build_parser, main

KEYWORD_TEXT = "This is an important concept to remember. It's key for the exam and defines the main theory."


@pytest.fixture
def transcript_file(tmp_path):
    f = tmp_path / "lecture.json"
    f.write_text(json.dumps([
        {"text": "Short", "start": 0, "end": 5},
        {"text": KEYWORD_TEXT, "start": 5, "end": 35},
    ]))
    return str(f)


@pytest.fixture
def deck_file(tmp_path):
    f = tmp_path / "deck.json"
    f.write_text(json.dumps([{"interval": 0}, {"interval": 180, "review_count": 6, "correct_count": 6}]))
    return str(f)


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_highlights_command(transcript_file, capsys):
    assert main(["highlights", transcript_file]) == 0
    out = capsys.readouterr().out
    assert "Highlights (1/2 chunks)" in out
    assert "00:05 - 00:35" in out


def test_highlights_command_none_found(tmp_path, capsys):
    f = tmp_path / "plain.txt"
    f.write_text("The weather today is nice. Birds are singing. Trees are green.\n")
    assert main(["highlights", str(f)]) == 0
    assert "No highlights found" in capsys.readouterr().out


def test_mastery_command(deck_file, capsys):
    assert main(["mastery", deck_file, "--target", "85"]) == 0
    out = capsys.readouterr().out
    assert "50.0%" in out
    assert "NEEDS WORK" in out
    assert "Mastered" in out


def test_preview_command(deck_file, capsys):
    assert main(["preview", deck_file]) == 0
    out = capsys.readouterr().out
    assert "Again" in out
    assert "Easy" in out


def test_invalid_card_is_reported(tmp_path, capsys):
    f = tmp_path / "deck.json"
    f.write_text(json.dumps([{"ease_factor": 5.0}]))
    assert main(["mastery", str(f)]) == 1
    assert "Data integrity warning" in capsys.readouterr().out


def test_missing_file_is_reported(tmp_path, capsys):
    assert main(["mastery", str(tmp_path / "nope.json")]) == 2
    assert "Error" in capsys.readouterr().out


def test_null_chunk_text_is_reported(tmp_path, capsys):
    f = tmp_path / "lecture.json"
    f.write_text(json.dumps([{"text": None, "start": 0, "end": 5}]))
    assert main(["highlights", str(f)]) == 2
    assert "malformed chunk #0" in capsys.readouterr().out
