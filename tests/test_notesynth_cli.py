import json
from pathlib import Path

import pytest

from notesynth.cli import build_parser, default_output_path, main
from notesynth.wav import parse_wav_header

SCORE = {
    "bpm": 120,
    "notes": [
        {"id": 9, "octave": 4, "beats": 1, "amplitude": 0.8},
        {"id": 11, "octave": 4, "beats": 1, "amplitude": 0.8},
    ],
}


@pytest.fixture(autouse=True)
def _log_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTESYNTH_LOG_DIR", str(tmp_path / "logs"))


def _write_score(tmp_path: Path, data: dict[str, object], name: str = "song.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_default_output_path_uses_input_stem() -> None:
    assert default_output_path(Path("scores/melody.json"), Path("output")) == Path(
        "output/melody.wav"
    )


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_render_writes_wav(tmp_path: Path) -> None:
    source = _write_score(tmp_path, SCORE)
    out_dir = tmp_path / "rendered"
    code = main(["render", str(source), "--output-dir", str(out_dir), "--sample-rate", "8000"])
    assert code == 0
    header = parse_wav_header((out_dir / "song.wav").read_bytes())
    assert header.sample_rate == 8_000
    assert header.sample_count == 8_000


def test_render_timeline_with_explicit_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    data = {
        "bpm": 60,
        "timeline": True,
        "notes": [{"id": 0, "octave": 4, "start_time": 0, "duration": 1, "amplitude": 0.5}],
        "adsr": {"attack": 0.1, "decay": 0.1, "sustain": 0.5, "release": 0.5},
    }
    source = _write_score(tmp_path, data)
    target = tmp_path / "explicit.wav"
    assert main(["render", str(source), "--output", str(target), "--sample-rate", "8000"]) == 0
    assert parse_wav_header(target.read_bytes()).sample_count == 12_000
    assert "timeline" in capsys.readouterr().out


def test_render_invalid_score_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_score(tmp_path, {**SCORE, "bpm": 0})
    out_dir = tmp_path / "rendered"
    assert main(["render", str(source), "--output-dir", str(out_dir)]) == 1
    assert not out_dir.exists()
    assert "InvalidBpm" in capsys.readouterr().err


def test_render_missing_input_fails(tmp_path: Path) -> None:
    assert main(["render", str(tmp_path / "nope.json")]) == 1


def test_inspect_reports_header(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_score(tmp_path, SCORE)
    target = tmp_path / "song.wav"
    assert main(["render", str(source), "--output", str(target), "--sample-rate", "8000"]) == 0
    capsys.readouterr()
    assert main(["inspect", str(target)]) == 0
    out = capsys.readouterr().out
    assert "8000 Hz" in out
    assert "16 bits" in out


def test_render_infinite_beats_fails_cleanly(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "endless.json"
    source.write_text(
        '{"bpm": 120, "notes": [{"id": 9, "octave": 4, "beats": Infinity, "amplitude": 0.5}]}',
        encoding="utf-8",
    )
    out_dir = tmp_path / "rendered"
    assert main(["render", str(source), "--output-dir", str(out_dir)]) == 1
    assert not out_dir.exists()
    assert "InvalidConfigError" in capsys.readouterr().err
