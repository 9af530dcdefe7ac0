from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from pydantic import ValidationError

from .errors import InvalidConfigError
from .models import AnyScore, Score, TimelineScore

_LOGGER = logging.getLogger("notesynth.config")


def is_timeline(data: Mapping[str, Any]) -> bool:
    return data.get("timeline") is True


def parse_score(data: object) -> AnyScore:
    """Build a Score or TimelineScore from decoded JSON.

    The ``timeline`` flag picks the form. Range checks on bpm, pitch and
    amplitude are left to the renderer so they raise the specific errors.
    """
    match data:
        case Mapping():
            mapping = cast(Mapping[str, Any], data)
        case _:
            raise InvalidConfigError("Score must be a JSON object")
    try:
        if is_timeline(mapping):
            return TimelineScore.model_validate(mapping)
        return Score.model_validate(mapping)
    except ValidationError as exc:
        hint = (
            "ensure notes have 'start_time' and 'duration' fields"
            if is_timeline(mapping)
            else "ensure notes have 'beats' field"
        )
        raise InvalidConfigError(f"Failed to parse score ({hint}): {exc}") from exc


def load_score(path: str | Path) -> AnyScore:
    target = Path(path)
    try:
        text = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidConfigError(f"Failed to read input file: {target}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(f"Failed to parse JSON input file {target}: {exc}") from exc
    score = parse_score(data)
    _LOGGER.debug("Loaded %s with %d notes from %s", type(score).__name__, len(score.notes), target)
    return score
