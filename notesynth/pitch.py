from __future__ import annotations

from .errors import InvalidNoteId

A4_FREQUENCY = 440.0
A4_NOTE_ID = 9
A4_OCTAVE = 4
NOTES_PER_OCTAVE = 12


def semitones_from_a4(note_id: int, octave: int) -> int:
    """Signed distance in semitones between (note_id, octave) and A4."""
    return (note_id - A4_NOTE_ID) + NOTES_PER_OCTAVE * (octave - A4_OCTAVE)


def frequency(note_id: int, octave: int) -> float:
    """Equal-tempered frequency in Hz, with A4 (id 9, octave 4) at 440 Hz."""
    if not 0 <= note_id < NOTES_PER_OCTAVE:
        raise InvalidNoteId(note_id)
    return A4_FREQUENCY * 2 ** (semitones_from_a4(note_id, octave) / NOTES_PER_OCTAVE)
