"""Result containers shared by the story and criteria scorers."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CriteriaFormat(str, Enum):
    """Declared acceptance-criteria style. Selects the scoring rules."""

    GHERKIN = "gherkin"
    BULLET = "bullet"

    @classmethod
    def parse(cls, value) -> "CriteriaFormat":
        """Map any value to a format; unknown or missing values fall back to Gherkin."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.GHERKIN


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class StoryInput(_Frozen):
    """A three-part user story as typed by the author."""

    as_a: str = ""
    i_want: str = ""
    so_that: str = ""


class StoryScoreResult(_Frozen):
    total_score: int = Field(ge=0, le=55)
    breakdown: Dict[str, int]
    feedback: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    word_count: int = 0


class CriteriaScoreResult(_Frozen):
    total_score: int = Field(ge=0, le=55)
    breakdown: Dict[str, int]  # empty when no criteria were given
    feedback: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    criteria_count: int = 0


class SubScore(_Frozen):
    score: int
    max_score: int
    label: str


class SingleCriterionRating(_Frozen):
    score: int
    max_score: int
    grade: str
    color: str
    feedback: str = ""
    breakdown: Dict[str, SubScore] = Field(default_factory=dict)


class SingleRating(_Frozen):
    """Live rating of one story field (the "so that" statement)."""

    score: int
    max_score: int = 20
    grade: str
    color: str
    feedback: str = ""


class CombinedSummary(_Frozen):
    combined_score: int
    max_score: int = 110
    percentage: int
    grade: str
    message: str


GRADE_COLORS = {
    "Excellent": "green",
    "Good": "blue",
    "Fair": "yellow",
    "Needs work": "orange",
}


def grade_for(score: float, excellent: float, good: float, fair: float) -> str:
    """Return the tier whose lower bound ``score`` reaches."""
    if score >= excellent:
        return "Excellent"
    if score >= good:
        return "Good"
    if score >= fair:
        return "Fair"
    return "Needs work"


def color_for(grade: Optional[str]) -> str:
    return GRADE_COLORS.get(grade or "", "")
