from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidConfigError

FloatArray: TypeAlias = NDArray[np.float64]
PcmArray: TypeAlias = NDArray[np.int16]
IndexArray: TypeAlias = NDArray[np.integer[Any]]
PcmNumbers: TypeAlias = PcmArray | Sequence[int]

SAMPLE_RATE = 44_100
PCM_MAX = 2 ** (16 - 1) - 1


def to_pcm16(values: FloatArray | float) -> PcmArray:
    """Clamp to [-1, 1] and scale to signed 16-bit, truncating toward zero."""
    clamped = np.clip(np.asarray(values, dtype=np.float64), -1.0, 1.0)
    return (clamped * PCM_MAX).astype(np.int16)


def soft_clip_to_pcm16(values: FloatArray) -> PcmArray:
    """Saturate a mixed signal with tanh before scaling to signed 16-bit."""
    clipped = np.tanh(np.asarray(values, dtype=np.float64))
    return (clipped * PCM_MAX).astype(np.int16)


def ensure_pcm_contract(samples: PcmNumbers) -> PcmArray:
    """Normalize a mono sample sequence to a one-dimensional int16 array."""
    array = np.asarray(samples)
    if array.ndim > 1:
        raise InvalidConfigError(f"PCM samples must be mono, got shape {array.shape}")
    if array.size and array.dtype != np.int16:
        if np.issubdtype(array.dtype, np.floating) or (
            array.min() < -PCM_MAX - 1 or array.max() > PCM_MAX
        ):
            raise InvalidConfigError("PCM samples must be integers in the signed 16-bit range")
    return array.astype(np.int16).reshape(-1)


def duration_seconds(sample_count: int, sample_rate: int = SAMPLE_RATE) -> float:
    return sample_count / sample_rate if sample_rate > 0 else 0.0
