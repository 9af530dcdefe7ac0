from __future__ import annotations

from .audio import SAMPLE_RATE
from .dx import Audio, render, render_file, single_bezier_wave, single_sine_wave
from .envelope import ADSREnvelope, EnvelopeParams, EnvelopeState
from .errors import (
    EmptyNotes,
    InvalidAmplitude,
    InvalidBpm,
    InvalidConfigError,
    InvalidControlPoints,
    InvalidNoteId,
    InvalidOctave,
    NoteSynthError,
    WavWriteError,
)
from .logging_utils import configure_logging as _configure_logging
from .models import Note, Score, TimelineNote, TimelineScore
from .oscillator import BezierWave, SineWave, Waveform, make_waveform
from .pitch import frequency
from .sequencer import (
    Renderer,
    SequentialRenderer,
    TimelineRenderer,
    build_renderer,
    sequential_renderer,
    timeline_renderer,
)
from .wav import encode_and_write, encode_wav, parse_wav_header, read_wav, write_wav

__all__ = [
    "SAMPLE_RATE",
    "ADSREnvelope",
    "Audio",
    "BezierWave",
    "EmptyNotes",
    "EnvelopeParams",
    "EnvelopeState",
    "InvalidAmplitude",
    "InvalidBpm",
    "InvalidConfigError",
    "InvalidControlPoints",
    "InvalidNoteId",
    "InvalidOctave",
    "Note",
    "NoteSynthError",
    "Renderer",
    "Score",
    "SequentialRenderer",
    "SineWave",
    "TimelineNote",
    "TimelineRenderer",
    "TimelineScore",
    "WavWriteError",
    "Waveform",
    "build_renderer",
    "encode_and_write",
    "encode_wav",
    "frequency",
    "make_waveform",
    "parse_wav_header",
    "read_wav",
    "render",
    "render_file",
    "sequential_renderer",
    "single_bezier_wave",
    "single_sine_wave",
    "timeline_renderer",
    "write_wav",
]

__version__ = "0.1.0"

_configure_logging()
del _configure_logging
