from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .errors import (
    EmptyNotes,
    InvalidAmplitude,
    InvalidBpm,
    InvalidControlPoints,
    InvalidNoteId,
    InvalidOctave,
)

MAX_BPM = 255
MAX_NOTE_ID = 11
MAX_OCTAVE = 8
CONTROL_POINT_COUNT = 4


class PitchedNote(Protocol):
    @property
    def note_id(self) -> int: ...

    @property
    def octave(self) -> int: ...

    @property
    def amplitude(self) -> float: ...


def validate_bpm(bpm: int) -> None:
    if not 1 <= bpm <= MAX_BPM:
        raise InvalidBpm(bpm)


def validate_note(note: PitchedNote) -> None:
    """Check the pitch and loudness fields shared by both note forms."""
    if not 0 <= note.note_id <= MAX_NOTE_ID:
        raise InvalidNoteId(note.note_id)
    if not 0 <= note.octave <= MAX_OCTAVE:
        raise InvalidOctave(note.octave)
    # Written as a range check so NaN is rejected too.
    if not 0.0 <= note.amplitude <= 1.0:
        raise InvalidAmplitude(note.amplitude)


def validate_notes(notes: Sequence[PitchedNote]) -> None:
    if not notes:
        raise EmptyNotes()
    for note in notes:
        validate_note(note)


def validate_control_points(points: Sequence[float]) -> None:
    if len(points) != CONTROL_POINT_COUNT:
        raise InvalidControlPoints(
            f"Expected {CONTROL_POINT_COUNT} control points, got {len(points)}"
        )
    for index, point in enumerate(points):
        if not -1.0 <= point <= 1.0:
            raise InvalidControlPoints(
                f"Control point {index} has value {point}, must be between -1.0 and 1.0"
            )
