"""Badge catalogs and the pure predicates that unlock them.

The evaluators only report which badges a result qualifies for. Tracking
which ones a writer has already earned is up to the caller (deduplicate by
``id``).
"""

from typing import Callable, Dict, List, Mapping, Sequence, Tuple

from pydantic import BaseModel, ConfigDict


class AchievementRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    requirement: str


CRYSTAL_CLEAR = AchievementRecord(
    id="crystal-clear",
    name="Crystal Clear Value",
    description="Scored 50+ points on a story",
    requirement="story score >= 50",
)
EPIC_WRITER = AchievementRecord(
    id="epic-writer",
    name="Epic Writer",
    description="Scored 55+ points on a story",
    requirement="story score >= 55",
)
CONCISE_MASTER = AchievementRecord(
    id="concise-master",
    name="Concise Master",
    description="Wrote a high-quality story in 20 words or less",
    requirement="story score >= 40 and word count <= 20",
)
ON_FIRE = AchievementRecord(
    id="on-fire",
    name="On Fire!",
    description="Three consecutive stories with 40+ points",
    requirement="last three history scores >= 40",
)

TESTABILITY_MASTER = AchievementRecord(
    id="testability-master",
    name="Testability Master",
    description="Scored 50+ points on acceptance criteria",
    requirement="criteria score >= 50",
)
GHERKIN_GURU = AchievementRecord(
    id="gherkin-guru",
    name="Gherkin Guru",
    description="Perfect format score on acceptance criteria",
    requirement="format breakdown >= 9",
)
OBSERVABLE_OUTCOMES = AchievementRecord(
    id="observable-outcomes",
    name="Observable Outcomes",
    description="Excellent testability score (14+)",
    requirement="testability breakdown >= 14",
)
COMPREHENSIVE_COVERAGE = AchievementRecord(
    id="comprehensive-coverage",
    name="Comprehensive Coverage",
    description="Wrote 5+ high-quality acceptance criteria",
    requirement="criteria count >= 5 and criteria score >= 45",
)

StoryPredicate = Callable[[int, int, Sequence[int]], bool]
CriteriaPredicate = Callable[[int, int, Mapping[str, int]], bool]


def _on_fire(score: int, word_count: int, recent_scores: Sequence[int]) -> bool:
    recent = list(recent_scores)[-3:]
    return len(recent) == 3 and all(s >= 40 for s in recent)


STORY_ACHIEVEMENTS: Tuple[Tuple[AchievementRecord, StoryPredicate], ...] = (
    (CRYSTAL_CLEAR, lambda score, words, recent: score >= 50),
    (EPIC_WRITER, lambda score, words, recent: score >= 55),
    (CONCISE_MASTER, lambda score, words, recent: score >= 40 and words <= 20),
    (ON_FIRE, _on_fire),
)

CRITERIA_ACHIEVEMENTS: Tuple[Tuple[AchievementRecord, CriteriaPredicate], ...] = (
    (TESTABILITY_MASTER, lambda score, count, breakdown: score >= 50),
    (GHERKIN_GURU, lambda score, count, breakdown: breakdown.get("format", 0) >= 9),
    (OBSERVABLE_OUTCOMES, lambda score, count, breakdown: breakdown.get("testability", 0) >= 14),
    (COMPREHENSIVE_COVERAGE, lambda score, count, breakdown: count >= 5 and score >= 45),
)

CATALOG: Dict[str, AchievementRecord] = {
    record.id: record for record, _ in STORY_ACHIEVEMENTS + CRITERIA_ACHIEVEMENTS
}


def check_achievements(
    score: int,
    word_count: int,
    recent_scores: Sequence[int] = (),
) -> List[AchievementRecord]:
    """Story badges for a result.

    Args:
        score: Story total score.
        word_count: Story word count.
        recent_scores: Earlier story scores, oldest first. Only the last
            three matter.
    """
    return [record for record, unlocked in STORY_ACHIEVEMENTS if unlocked(score, word_count, recent_scores)]


def check_criteria_achievements(
    score: int,
    criteria_count: int,
    breakdown: Mapping[str, int],
) -> List[AchievementRecord]:
    """Criteria badges for a result. An empty breakdown unlocks only score/count badges."""
    breakdown = breakdown or {}
    return [
        record
        for record, unlocked in CRITERIA_ACHIEVEMENTS
        if unlocked(score, criteria_count, breakdown)
    ]
