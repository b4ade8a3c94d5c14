"""Practice rounds: score a story, then its criteria, then record the round."""

from typing import Dict, List, Optional, Sequence, Set, Union

from loguru import logger
from pydantic import BaseModel, Field

from ..errors import StoryScorerError
from ..gamification import (
    AchievementRecord,
    CATALOG,
    Progression,
    calculate_progression,
    check_achievements,
    check_criteria_achievements,
    progress_to_next,
)
from ..scoring.lexicons import text_items
from ..scoring.story import coerce_story
from ..scoring import (
    CombinedSummary,
    CriteriaFormat,
    CriteriaScoreResult,
    StoryInput,
    StoryScoreResult,
    combined_summary,
    score_criteria,
    score_story,
)
from .repository import HistoryEntry, HistoryRepository


class StoryRound(BaseModel):
    story: StoryInput
    result: StoryScoreResult
    new_achievements: List[AchievementRecord] = Field(default_factory=list)


class RoundResult(BaseModel):
    entry: HistoryEntry
    story_result: StoryScoreResult
    criteria_result: CriteriaScoreResult
    summary: CombinedSummary
    new_achievements: List[AchievementRecord] = Field(default_factory=list)
    xp_gained: int
    total_xp: int
    progression: Progression


def _fresh(unlocked: Sequence[AchievementRecord], earned: Set[str]) -> List[AchievementRecord]:
    fresh = []
    for record in unlocked:
        if record.id not in earned:
            earned.add(record.id)
            fresh.append(record)
    return fresh


class PracticeSession:
    """Drives one writer's practice against a history store.

    XP and earned badges are derived from the recorded rounds, so a story
    whose criteria were never submitted earns nothing.
    """

    def __init__(
        self,
        repository: HistoryRepository,
        default_format: CriteriaFormat = CriteriaFormat.GHERKIN,
    ):
        self.repository = repository
        self.default_format = CriteriaFormat.parse(default_format)
        self._pending: Optional[StoryRound] = None

    @property
    def history(self) -> List[HistoryEntry]:
        return self.repository.load()

    @property
    def total_xp(self) -> int:
        return sum(entry.story_score + entry.criteria_score for entry in self.history)

    @property
    def earned_ids(self) -> Set[str]:
        return {achievement_id for entry in self.history for achievement_id in entry.achievements}

    @property
    def earned_achievements(self) -> List[AchievementRecord]:
        # Preserve the order in which badges were earned
        seen = []
        for entry in self.history:
            for achievement_id in entry.achievements:
                if achievement_id in CATALOG and CATALOG[achievement_id] not in seen:
                    seen.append(CATALOG[achievement_id])
        return seen

    @property
    def progression(self) -> Progression:
        return calculate_progression(self.total_xp)

    @property
    def level_progress(self) -> float:
        return progress_to_next(self.total_xp)

    @property
    def pending(self) -> Optional[StoryRound]:
        return self._pending

    def submit_story(self, story: Union[StoryInput, Dict[str, str]]) -> StoryRound:
        """Score a story and hold it until its criteria are submitted."""
        result = score_story(story)
        story = coerce_story(story)

        history = self.history
        recent = [entry.story_score for entry in history]
        earned = {achievement_id for entry in history for achievement_id in entry.achievements}
        new_achievements = _fresh(check_achievements(result.total_score, result.word_count, recent), earned)

        self._pending = StoryRound(story=story, result=result, new_achievements=new_achievements)
        logger.info(f"Story scored {result.total_score}/55")
        return self._pending

    def submit_criteria(
        self,
        criteria: Sequence[str],
        fmt: Optional[CriteriaFormat] = None,
    ) -> RoundResult:
        """Score criteria against the pending story and record the round."""
        if self._pending is None:
            raise StoryScorerError("Submit a story before its acceptance criteria")

        fmt = CriteriaFormat.parse(fmt) if fmt is not None else self.default_format
        pending = self._pending
        criteria = text_items(criteria)

        criteria_result = score_criteria(criteria, pending.story.so_that, fmt)

        earned = self.earned_ids | {record.id for record in pending.new_achievements}
        criteria_achievements = _fresh(
            check_criteria_achievements(
                criteria_result.total_score,
                criteria_result.criteria_count,
                criteria_result.breakdown,
            ),
            earned,
        )
        new_achievements = pending.new_achievements + criteria_achievements

        story_score = pending.result.total_score
        entry = HistoryEntry(
            as_a=pending.story.as_a,
            i_want=pending.story.i_want,
            so_that=pending.story.so_that,
            criteria=criteria,
            criteria_format=fmt,
            story_score=story_score,
            criteria_score=criteria_result.total_score,
            combined_score=story_score + criteria_result.total_score,
            achievements=[record.id for record in new_achievements],
        )
        self.repository.append(entry)
        self._pending = None

        total_xp = self.total_xp
        if new_achievements:
            logger.success(f"Unlocked: {', '.join(record.name for record in new_achievements)}")
        logger.info(f"Round recorded: {entry.combined_score}/110, total XP {total_xp}")

        return RoundResult(
            entry=entry,
            story_result=pending.result,
            criteria_result=criteria_result,
            summary=combined_summary(story_score, criteria_result.total_score),
            new_achievements=new_achievements,
            xp_gained=entry.combined_score,
            total_xp=total_xp,
            progression=calculate_progression(total_xp),
        )

    def practice(
        self,
        story: Union[StoryInput, Dict[str, str]],
        criteria: Sequence[str] = (),
        fmt: Optional[CriteriaFormat] = None,
    ) -> RoundResult:
        """Score a story and its criteria in one call."""
        self.submit_story(story)
        return self.submit_criteria(criteria, fmt)

    def discard(self):
        self._pending = None
