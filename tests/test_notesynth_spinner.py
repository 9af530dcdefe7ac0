import io

import pytest
from rich.console import Console

from notesynth import feedback
from notesynth.errors import InvalidBpm
from notesynth.spinner import Spinner, render_error, spinner


def test_spinner_disabled_is_noop() -> None:
    handle = Spinner("Rendering", enabled=False)
    handle.start()
    handle.update("Still rendering")
    handle.stop()


def test_spinner_context_manager_disabled() -> None:
    with spinner("Rendering", enabled=False) as handle:
        handle.update("Mixing")


def test_render_error_plain_stream() -> None:
    stream = io.StringIO()
    render_error("render", InvalidBpm(0), stream=stream)
    output = stream.getvalue()
    assert "render failed: InvalidBpm" in output
    assert "BPM must be between 1 and 255" in output


def test_feedback_lines(monkeypatch: pytest.MonkeyPatch) -> None:
    buffer = io.StringIO()
    monkeypatch.setattr(feedback, "_CONSOLE", Console(file=buffer, force_terminal=False, width=200))
    feedback.info("Using timeline orchestrator")
    feedback.processing("Rendering [3] notes")
    feedback.success("Wrote output/song.wav")
    text = buffer.getvalue()
    assert "→ Using timeline orchestrator" in text
    assert "⚙ Rendering [3] notes" in text
    assert "✓ Wrote output/song.wav" in text
