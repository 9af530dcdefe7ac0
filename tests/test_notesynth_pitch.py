import pytest

from notesynth.errors import InvalidNoteId
from notesynth.pitch import frequency, semitones_from_a4


def test_a4_is_exactly_440() -> None:
    assert frequency(9, 4) == 440.0


def test_middle_c() -> None:
    assert frequency(0, 4) == pytest.approx(261.6256, rel=1e-6)


@pytest.mark.parametrize("octave", range(8))
def test_octave_up_doubles_frequency(octave: int) -> None:
    for note_id in range(12):
        assert frequency(note_id, octave + 1) == pytest.approx(2 * frequency(note_id, octave))


def test_semitone_offset_is_octave_equivalent() -> None:
    for note_id in range(12):
        for octave in range(8):
            assert semitones_from_a4(note_id + 12, octave) == semitones_from_a4(note_id, octave + 1)


def test_note_id_out_of_range() -> None:
    with pytest.raises(InvalidNoteId) as excinfo:
        frequency(12, 4)
    assert excinfo.value.note_id == 12
    assert "12" in str(excinfo.value)
