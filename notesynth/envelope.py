from __future__ import annotations

import logging
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .audio import FloatArray

_LOGGER = logging.getLogger("notesynth.envelope")


class EnvelopeState(Enum):
    ATTACK = "attack"
    DECAY = "decay"
    SUSTAIN = "sustain"
    RELEASE = "release"


class EnvelopeParams(BaseModel):
    """ADSR settings shared by every note of a timeline render.

    ``attack``, ``decay`` and ``release`` are seconds, ``sustain`` is a level.
    """

    attack: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    decay: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    sustain: float = Field(default=1.0, ge=0.0, le=1.0)
    release: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_tuple(cls, values: tuple[float, float, float, float]) -> "EnvelopeParams":
        attack, decay, sustain, release = values
        return cls(attack=attack, decay=decay, sustain=sustain, release=release)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.attack, self.decay, self.sustain, self.release)


class ADSREnvelope:
    """Per-note attack/decay/sustain/release amplitude shaper.

    Sample indices are local to the note. Release starts once the index passes
    the note's nominal length and ramps linearly to zero from whatever level
    the envelope had reached, so a note shorter than its attack releases from
    its partial level rather than from 1.0. Release is final: an instance never
    leaves it.

    ``apply`` handles one sample; ``apply_block`` handles a contiguous run of
    indices and leaves the instance in the same state as the equivalent
    sequence of ``apply`` calls.
    """

    def __init__(self, params: EnvelopeParams, sample_rate: int, note_seconds: float) -> None:
        self._sustain = params.sustain
        self._attack_len = params.attack * sample_rate
        self._decay_len = params.decay * sample_rate
        self._release_len = params.release * sample_rate
        self._release_at = note_seconds * sample_rate
        self._attack_end = int(self._attack_len)
        self._decay_end = int((params.attack + params.decay) * sample_rate)
        self._release_index = int(self._release_at)
        self._state = EnvelopeState.ATTACK
        self._factor = 0.0
        self._release_level = 0.0

    @property
    def state(self) -> EnvelopeState:
        return self._state

    @property
    def factor(self) -> float:
        """Most recently applied amplitude factor."""
        return self._factor

    def state_at(self, sample_index: int) -> EnvelopeState:
        if self._state is EnvelopeState.RELEASE or sample_index > self._release_index:
            return EnvelopeState.RELEASE
        if sample_index < self._attack_end:
            return EnvelopeState.ATTACK
        if sample_index < self._decay_end:
            return EnvelopeState.DECAY
        return EnvelopeState.SUSTAIN

    def apply(self, sample: float, sample_index: int) -> float:
        self._state = self.state_at(sample_index)
        match self._state:
            case EnvelopeState.ATTACK:
                factor = sample_index / self._attack_len
            case EnvelopeState.DECAY:
                progress = (sample_index - self._attack_len) / self._decay_len
                factor = 1.0 - (1.0 - self._sustain) * progress
            case EnvelopeState.SUSTAIN:
                factor = self._sustain
            case EnvelopeState.RELEASE:
                factor = self._release_factor(float(sample_index))
        if self._state is not EnvelopeState.RELEASE:
            self._release_level = factor
        self._factor = factor
        return sample * factor

    def _release_factor(self, sample_index: float) -> float:
        if self._release_len <= 0.0:
            return 0.0
        remaining = 1.0 - (sample_index - self._release_at) / self._release_len
        return self._release_level * max(remaining, 0.0)

    def apply_block(self, samples: FloatArray, start_index: int = 0) -> FloatArray:
        raw = np.asarray(samples, dtype=np.float64)
        if raw.size == 0:
            return raw.copy()
        indices = start_index + np.arange(raw.size)
        factors = np.empty(raw.size, dtype=np.float64)

        if self._state is EnvelopeState.RELEASE:
            held = np.zeros(raw.size, dtype=bool)
        else:
            held = indices <= self._release_index
        if held.any():
            held_idx = indices[held].astype(np.float64)
            factors[held] = self._shape_factors(held_idx)
            last = int(indices[held][-1])
            self._release_level = float(factors[held][-1])
            self._state = self.state_at(last)

        released = ~held
        if released.any():
            released_idx = indices[released].astype(np.float64)
            if self._release_len <= 0.0:
                factors[released] = 0.0
            else:
                remaining = 1.0 - (released_idx - self._release_at) / self._release_len
                factors[released] = self._release_level * np.clip(remaining, 0.0, None)
            self._state = EnvelopeState.RELEASE

        self._factor = float(factors[-1])
        return raw * factors

    def _shape_factors(self, indices: FloatArray) -> FloatArray:
        factors = np.full(indices.size, self._sustain, dtype=np.float64)
        attack = indices < self._attack_end
        if attack.any():
            factors[attack] = indices[attack] / self._attack_len
        decay = ~attack & (indices < self._decay_end)
        if decay.any():
            progress = (indices[decay] - self._attack_len) / self._decay_len
            factors[decay] = 1.0 - (1.0 - self._sustain) * progress
        return factors

    def factors(self, count: int) -> FloatArray:
        """Envelope curve for local indices 0..count-1."""
        _LOGGER.debug("Computing %d envelope factors", count)
        return self.apply_block(np.ones(count, dtype=np.float64))
