from __future__ import annotations

from pathlib import Path


class NoteSynthError(Exception):
    """Base error for the notesynth library."""


class InvalidConfigError(NoteSynthError):
    """Raised when a score or render job cannot be parsed or validated."""


class InvalidNoteId(InvalidConfigError):
    def __init__(self, note_id: int) -> None:
        self.note_id = note_id
        super().__init__(
            f"Invalid note ID: {note_id}. Note ID must be between 0 and 11 (12 chromatic notes)"
        )


class InvalidBpm(InvalidConfigError):
    def __init__(self, bpm: int) -> None:
        self.bpm = bpm
        super().__init__(f"Invalid BPM: {bpm}. BPM must be between 1 and 255")


class InvalidOctave(InvalidConfigError):
    def __init__(self, octave: int) -> None:
        self.octave = octave
        super().__init__(f"Invalid octave: {octave}. Octave must be between 0 and 8")


class InvalidAmplitude(InvalidConfigError):
    def __init__(self, amplitude: float) -> None:
        self.amplitude = amplitude
        super().__init__(f"Invalid amplitude: {amplitude}. Amplitude must be between 0.0 and 1.0")


class EmptyNotes(InvalidConfigError):
    def __init__(self) -> None:
        super().__init__("No notes provided. At least one note is required")


class InvalidControlPoints(InvalidConfigError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid control points: {detail}")


class WavWriteError(NoteSynthError):
    """Raised when an encoded container cannot be written to disk."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Failed to write WAV file {self.path}: {reason}")
