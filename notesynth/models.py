from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .envelope import EnvelopeParams
from .pitch import frequency


class Note(BaseModel):
    """A note in a sequential score; notes play back to back."""

    note_id: int = Field(alias="id")
    octave: int
    beats: float = Field(gt=0.0, allow_inf_nan=False)
    amplitude: float

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @property
    def frequency(self) -> float:
        return frequency(self.note_id, self.octave)


class TimelineNote(BaseModel):
    """A note placed at an absolute beat offset; may overlap other notes."""

    note_id: int = Field(alias="id")
    octave: int
    start_time: float = Field(ge=0.0, allow_inf_nan=False)
    duration: float = Field(gt=0.0, allow_inf_nan=False)
    amplitude: float

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @property
    def frequency(self) -> float:
        return frequency(self.note_id, self.octave)

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


class Score(BaseModel):
    """Sequential render input as read from JSON."""

    bpm: int
    notes: tuple[Note, ...]
    control_points: tuple[float, ...] | None = None
    timeline: Literal[False] = False

    model_config = ConfigDict(frozen=True, extra="forbid")


class TimelineScore(BaseModel):
    """Timeline render input as read from JSON (``"timeline": true``)."""

    bpm: int
    notes: tuple[TimelineNote, ...]
    control_points: tuple[float, ...] | None = None
    adsr: EnvelopeParams | None = None
    timeline: Literal[True] = True

    model_config = ConfigDict(frozen=True, extra="forbid")


AnyScore = Score | TimelineScore
