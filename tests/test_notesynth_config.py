import json
from pathlib import Path

import pytest

from notesynth.config import load_score, parse_score
from notesynth.errors import InvalidConfigError, InvalidNoteId
from notesynth.models import Score, TimelineScore
from notesynth.sequencer import TimelineRenderer, build_renderer

SEQUENTIAL = {
    "bpm": 120,
    "notes": [
        {"id": 9, "octave": 4, "beats": 1, "amplitude": 0.8},
        {"id": 0, "octave": 5, "beats": 0.5, "amplitude": 0.4},
    ],
}
TIMELINE = {
    "bpm": 90,
    "timeline": True,
    "control_points": [0.0, 0.5, -0.5, 0.0],
    "adsr": {"attack": 0.01, "decay": 0.05, "sustain": 0.7, "release": 0.2},
    "notes": [
        {"id": 0, "octave": 4, "start_time": 0, "duration": 2, "amplitude": 0.5},
        {"id": 4, "octave": 4, "start_time": 0.5, "duration": 1.5, "amplitude": 0.5},
    ],
}


def test_parse_sequential_score() -> None:
    score = parse_score(SEQUENTIAL)
    assert isinstance(score, Score)
    assert score.notes[0].note_id == 9
    assert score.notes[1].beats == 0.5
    assert score.control_points is None


def test_parse_timeline_score() -> None:
    score = parse_score(TIMELINE)
    assert isinstance(score, TimelineScore)
    assert score.control_points == (0.0, 0.5, -0.5, 0.0)
    assert score.adsr is not None
    assert score.adsr.sustain == 0.7
    assert score.notes[1].end_time == 2.0


def test_timeline_false_is_sequential() -> None:
    assert isinstance(parse_score({**SEQUENTIAL, "timeline": False}), Score)


def test_missing_beats_is_config_error() -> None:
    data = {"bpm": 120, "notes": [{"id": 9, "octave": 4, "amplitude": 0.8}]}
    with pytest.raises(InvalidConfigError, match="beats"):
        parse_score(data)


def test_unknown_keys_rejected() -> None:
    with pytest.raises(InvalidConfigError):
        parse_score({**SEQUENTIAL, "tempo": "fast"})


def test_non_object_rejected() -> None:
    with pytest.raises(InvalidConfigError):
        parse_score([1, 2, 3])


def test_range_errors_surface_at_renderer_construction() -> None:
    data = {"bpm": 120, "notes": [{"id": 12, "octave": 4, "beats": 1, "amplitude": 0.5}]}
    score = parse_score(data)
    with pytest.raises(InvalidNoteId):
        build_renderer(score)


def test_load_score_from_file(tmp_path: Path) -> None:
    path = tmp_path / "song.json"
    path.write_text(json.dumps(TIMELINE), encoding="utf-8")
    renderer = build_renderer(load_score(path))
    assert isinstance(renderer, TimelineRenderer)
    assert renderer.note_count() == 2
    assert renderer.uses_shaped_waveform()


def test_load_score_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidConfigError):
        load_score(path)


def test_load_score_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError, match="Failed to read"):
        load_score(tmp_path / "missing.json")


@pytest.mark.parametrize(
    ("data", "field"),
    [
        (
            {"bpm": 120, "notes": [{"id": 9, "octave": 4, "beats": float("inf"), "amplitude": 0.5}]},
            "beats",
        ),
        (
            {
                "bpm": 120,
                "timeline": True,
                "notes": [
                    {"id": 9, "octave": 4, "start_time": float("inf"), "duration": 1, "amplitude": 0.5}
                ],
            },
            "start_time",
        ),
        (
            {
                "bpm": 120,
                "timeline": True,
                "notes": [
                    {"id": 9, "octave": 4, "start_time": 0, "duration": float("inf"), "amplitude": 0.5}
                ],
            },
            "duration",
        ),
    ],
)
def test_infinite_timing_rejected_before_render(data: dict[str, object], field: str) -> None:
    with pytest.raises(InvalidConfigError, match=field):
        parse_score(data)


def test_infinite_release_rejected() -> None:
    with pytest.raises(InvalidConfigError, match="release"):
        parse_score({**TIMELINE, "adsr": {"release": float("inf")}})


def test_json_infinity_token_rejected(tmp_path: Path) -> None:
    path = tmp_path / "endless.json"
    path.write_text(
        '{"bpm": 120, "notes": [{"id": 9, "octave": 4, "beats": Infinity, "amplitude": 0.5}]}',
        encoding="utf-8",
    )
    with pytest.raises(InvalidConfigError):
        load_score(path)
