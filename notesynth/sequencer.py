"""
Sequencer/mixer.

Two render strategies share one contract (``render``, ``note_count``,
``uses_shaped_waveform``):

1. SequentialRenderer: notes play end to end, hard-clamped to 16-bit.
2. TimelineRenderer: notes sit at beat offsets, each shaped by its own ADSR
   envelope, summed into one accumulator and soft-clipped with tanh.

All range checks run when a renderer is constructed, so ``render`` never
fails half-way through a job.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

import numpy as np

from .audio import FloatArray, PcmArray, soft_clip_to_pcm16
from .envelope import ADSREnvelope, EnvelopeParams
from .models import AnyScore, Note, Score, TimelineNote, TimelineScore
from .oscillator import BezierWave, Waveform, make_waveform
from .validation import validate_bpm, validate_notes

_LOGGER = logging.getLogger("notesynth.sequencer")

# Per-note amplitude scale applied before mixing, to keep overlapping sums in range.
HEADROOM = 0.9


def seconds_per_beat(bpm: int) -> float:
    return 60.0 / bpm


@dataclass(frozen=True, slots=True)
class SequentialRenderer:
    bpm: int
    notes: tuple[Note, ...]
    waveform: Waveform = field(default_factory=make_waveform)

    def __post_init__(self) -> None:
        notes = tuple(self.notes)
        validate_bpm(self.bpm)
        validate_notes(notes)
        object.__setattr__(self, "notes", notes)

    def note_count(self) -> int:
        return len(self.notes)

    def uses_shaped_waveform(self) -> bool:
        return isinstance(self.waveform, BezierWave)

    def note_samples(self, note: Note, sample_rate: int) -> int:
        return int(note.beats * seconds_per_beat(self.bpm) * sample_rate)

    def render(self, sample_rate: int) -> PcmArray:
        chunks: list[PcmArray] = []
        for note in self.notes:
            indices = np.arange(self.note_samples(note, sample_rate))
            chunks.append(
                self.waveform.pcm_sample(note.frequency, note.amplitude, sample_rate, indices)
            )
        samples = np.concatenate(chunks).astype(np.int16)
        _LOGGER.debug(
            "Rendered %d sequential notes into %d samples at %d Hz",
            len(self.notes),
            samples.size,
            sample_rate,
        )
        return samples


@dataclass(frozen=True, slots=True)
class TimelineRenderer:
    bpm: int
    notes: tuple[TimelineNote, ...]
    waveform: Waveform = field(default_factory=make_waveform)
    envelope: EnvelopeParams = field(default_factory=EnvelopeParams)

    def __post_init__(self) -> None:
        notes = tuple(self.notes)
        validate_bpm(self.bpm)
        validate_notes(notes)
        object.__setattr__(self, "notes", notes)

    def note_count(self) -> int:
        return len(self.notes)

    def uses_shaped_waveform(self) -> bool:
        return isinstance(self.waveform, BezierWave)

    def buffer_length(self, sample_rate: int) -> int:
        """Timeline length in samples, including the last note's release tail."""
        total_beats = max(note.end_time for note in self.notes)
        total_seconds = total_beats * seconds_per_beat(self.bpm) + self.envelope.release
        return math.ceil(total_seconds * sample_rate)

    def render(self, sample_rate: int) -> PcmArray:
        mix = np.zeros(self.buffer_length(sample_rate), dtype=np.float64)
        for note in self.notes:
            mix = self._accumulate(mix, note, sample_rate)
        _LOGGER.debug(
            "Mixed %d timeline notes into %d samples at %d Hz",
            len(self.notes),
            mix.size,
            sample_rate,
        )
        return soft_clip_to_pcm16(mix)

    def _accumulate(self, mix: FloatArray, note: TimelineNote, sample_rate: int) -> FloatArray:
        spb = seconds_per_beat(self.bpm)
        start = int(note.start_time * spb * sample_rate)
        # Release is added in beats here; the buffer tail above is sized in seconds.
        count = int((note.duration + self.envelope.release) * spb * sample_rate)
        if start >= mix.size or count <= 0:
            return mix

        raw = self.waveform.sample(
            note.frequency, note.amplitude * HEADROOM, sample_rate, np.arange(count)
        )
        envelope = ADSREnvelope(self.envelope, sample_rate, note.duration * spb)
        shaped = envelope.apply_block(raw)

        end = min(start + count, mix.size)
        mix[start:end] += shaped[: end - start]
        return mix


Renderer: TypeAlias = SequentialRenderer | TimelineRenderer


def build_renderer(score: AnyScore) -> Renderer:
    """Validate a parsed score and return the renderer for its strategy."""
    match score:
        case TimelineScore():
            return timeline_renderer(score.bpm, score.notes, score.control_points, score.adsr)
        case Score():
            return sequential_renderer(score.bpm, score.notes, score.control_points)


def sequential_renderer(
    bpm: int,
    notes: Sequence[Note],
    control_points: Sequence[float] | None = None,
) -> SequentialRenderer:
    validate_bpm(bpm)
    validate_notes(notes)
    return SequentialRenderer(bpm=bpm, notes=tuple(notes), waveform=make_waveform(control_points))


def timeline_renderer(
    bpm: int,
    notes: Sequence[TimelineNote],
    control_points: Sequence[float] | None = None,
    adsr: EnvelopeParams | tuple[float, float, float, float] | None = None,
) -> TimelineRenderer:
    validate_bpm(bpm)
    validate_notes(notes)
    match adsr:
        case None:
            envelope = EnvelopeParams()
        case EnvelopeParams():
            envelope = adsr
        case _:
            envelope = EnvelopeParams.from_tuple(adsr)
    return TimelineRenderer(
        bpm=bpm, notes=tuple(notes), waveform=make_waveform(control_points), envelope=envelope
    )
