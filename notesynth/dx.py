from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray
from pydantic import BaseModel, ConfigDict, model_validator

from .audio import SAMPLE_RATE, PcmArray, duration_seconds, ensure_pcm_contract
from .config import load_score, parse_score
from .models import AnyScore
from .oscillator import BezierWave, SineWave, Waveform
from .sequencer import Renderer, build_renderer
from .wav import encode_wav, write_wav

_LOGGER = logging.getLogger("notesynth.dx")

ScoreInput = AnyScore | Mapping[str, Any]


class Audio(BaseModel):
    samples: PcmArray
    sample_rate: int = SAMPLE_RATE

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    @model_validator(mode="after")
    def _normalize(self) -> "Audio":
        object.__setattr__(self, "samples", ensure_pcm_contract(self.samples))
        return self

    @property
    def duration(self) -> float:
        return duration_seconds(self.samples.size, self.sample_rate)

    def to_numpy(self) -> PcmArray:
        return self.samples

    def __array__(self, dtype: DTypeLike | None = None, copy: bool | None = None) -> NDArray[Any]:
        return np.asarray(self.samples, dtype=dtype)

    def to_bytes(self) -> bytes:
        return encode_wav(self.samples, self.sample_rate)

    def save(self, path: str | Path) -> Path:
        return write_wav(path, self.samples, self.sample_rate)


def _coerce_renderer(score: ScoreInput | Renderer) -> Renderer:
    match score:
        case Mapping():
            return build_renderer(parse_score(score))
        case BaseModel():
            return build_renderer(score)
        case _:
            return score


def render(score: ScoreInput | Renderer, *, sample_rate: int = SAMPLE_RATE) -> Audio:
    """Render a score (model, decoded JSON, or prepared renderer) to PCM."""
    renderer = _coerce_renderer(score)
    return Audio(samples=renderer.render(sample_rate), sample_rate=sample_rate)


def render_file(
    input_path: str | Path,
    output_path: str | Path,
    *,
    sample_rate: int = SAMPLE_RATE,
) -> Path:
    renderer = build_renderer(load_score(input_path))
    audio = render(renderer, sample_rate=sample_rate)
    _LOGGER.info("Rendered %s (%.2fs) to %s", input_path, audio.duration, output_path)
    return audio.save(output_path)


def _single_wave(
    waveform: Waveform,
    frequency: float,
    amplitude: float,
    sample_rate: int,
    duration: float,
) -> bytes:
    indices = np.arange(int(duration * sample_rate))
    samples = waveform.pcm_sample(frequency, amplitude, sample_rate, indices)
    return encode_wav(samples, sample_rate)


def single_sine_wave(frequency: float, amplitude: float, sample_rate: int, duration: float) -> bytes:
    """Encode ``duration`` seconds of one sine tone as WAV bytes."""
    return _single_wave(SineWave(), frequency, amplitude, sample_rate, duration)


def single_bezier_wave(
    control_points: Sequence[float],
    frequency: float,
    amplitude: float,
    sample_rate: int,
    duration: float,
) -> bytes:
    """Encode ``duration`` seconds of one shaped tone as WAV bytes."""
    return _single_wave(
        BezierWave(tuple(control_points)), frequency, amplitude, sample_rate, duration
    )
