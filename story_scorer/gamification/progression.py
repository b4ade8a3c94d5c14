"""XP level lookup."""

from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict


class ProgressionLevel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    threshold: int


class Progression(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_level: ProgressionLevel
    next_level: Optional[ProgressionLevel] = None


LEVELS: Tuple[ProgressionLevel, ...] = (
    ProgressionLevel(name="Novice", threshold=0),
    ProgressionLevel(name="Apprentice", threshold=100),
    ProgressionLevel(name="Writer", threshold=300),
    ProgressionLevel(name="Storyteller", threshold=600),
    ProgressionLevel(name="Product Sage", threshold=1000),
)


def calculate_progression(total_xp: int, levels: Sequence[ProgressionLevel] = LEVELS) -> Progression:
    """Return the highest level reached and the one after it (None at the top).

    XP below the first threshold still maps to the first level. An empty
    table falls back to the default LEVELS.
    """
    ordered = sorted(levels or LEVELS, key=lambda level: level.threshold)
    index = 0
    for i, level in enumerate(ordered):
        if total_xp >= level.threshold:
            index = i

    next_level = ordered[index + 1] if index + 1 < len(ordered) else None
    return Progression(current_level=ordered[index], next_level=next_level)


def progress_to_next(total_xp: int, levels: Sequence[ProgressionLevel] = LEVELS) -> float:
    """Percentage (0-100) of the way from the current level to the next."""
    progression = calculate_progression(total_xp, levels)
    if progression.next_level is None:
        return 100.0

    floor = progression.current_level.threshold
    span = progression.next_level.threshold - floor
    percent = (total_xp - floor) / span * 100
    return max(0.0, min(100.0, percent))
