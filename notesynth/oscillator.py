"""
Waveform generators.

Both generators are stateless: the value at a sample index depends only on
(frequency, amplitude, sample_rate, sample_index) and, for the shaped wave,
its control points. ``sample_index`` may be a scalar or an integer array, in
which case a whole block is evaluated at once.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

import numpy as np

from .audio import FloatArray, IndexArray, PcmArray, to_pcm16
from .validation import validate_control_points

SampleIndex: TypeAlias = int | IndexArray


def _as_indices(sample_index: SampleIndex) -> FloatArray:
    return np.asarray(sample_index, dtype=np.float64)


def _unwrap(value: Any) -> Any:
    """Return 0-d results as numpy scalars so scalar callers get scalars back."""
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return value[()]
    return value


def _cubic_lobe(u: FloatArray, p1: float, p2: float) -> FloatArray:
    """Cubic Bezier with y-controls (0, p1, p2, 0) at parameter u."""
    inv = 1.0 - u
    return 3.0 * inv * inv * u * p1 + 3.0 * inv * u * u * p2


@dataclass(frozen=True, slots=True)
class SineWave:
    """Pure sine generator."""

    def sample(
        self,
        frequency: float,
        amplitude: float,
        sample_rate: int,
        sample_index: SampleIndex,
    ) -> FloatArray:
        x = 2.0 * np.pi * frequency * _as_indices(sample_index) / sample_rate
        return _unwrap(amplitude * np.sin(x))

    def pcm_sample(
        self,
        frequency: float,
        amplitude: float,
        sample_rate: int,
        sample_index: SampleIndex,
    ) -> PcmArray:
        return _unwrap(to_pcm16(self.sample(frequency, amplitude, sample_rate, sample_index)))


@dataclass(frozen=True, slots=True)
class BezierWave:
    """Periodic wave whose cycle shape comes from four control scalars.

    The cycle is split in two halves. The first half follows a cubic Bezier
    through y-controls (0, p0, p1, 0), the second half (0, p2, p3, 0). Each
    half starts and ends at zero, so consecutive cycles join without a jump,
    and the curve stays inside the convex hull of its controls, i.e. within
    [-1, 1] before amplitude scaling.
    """

    control_points: tuple[float, ...]

    def __post_init__(self) -> None:
        points = tuple(float(point) for point in self.control_points)
        validate_control_points(points)
        object.__setattr__(self, "control_points", points)

    def shape(self, position: FloatArray | float) -> FloatArray:
        """Evaluate the curve at a fractional cycle position in [0, 1)."""
        pos = np.asarray(position, dtype=np.float64)
        p0, p1, p2, p3 = self.control_points
        first_half = pos < 0.5
        u = np.where(first_half, 2.0 * pos, 2.0 * pos - 1.0)
        return _unwrap(np.where(first_half, _cubic_lobe(u, p0, p1), _cubic_lobe(u, p2, p3)))

    def sample(
        self,
        frequency: float,
        amplitude: float,
        sample_rate: int,
        sample_index: SampleIndex,
    ) -> FloatArray:
        cycles = frequency * _as_indices(sample_index) / sample_rate
        return _unwrap(amplitude * self.shape(np.mod(cycles, 1.0)))

    def pcm_sample(
        self,
        frequency: float,
        amplitude: float,
        sample_rate: int,
        sample_index: SampleIndex,
    ) -> PcmArray:
        return _unwrap(to_pcm16(self.sample(frequency, amplitude, sample_rate, sample_index)))


Waveform: TypeAlias = SineWave | BezierWave


def make_waveform(control_points: Sequence[float] | None = None) -> Waveform:
    """Pick the shaped generator when control points are given, else sine."""
    match control_points:
        case None:
            return SineWave()
        case _:
            return BezierWave(tuple(control_points))
