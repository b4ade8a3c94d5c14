from loguru import logger

from .scoring import (
    CriteriaFormat,
    StoryInput,
    combined_summary,
    criterion_hint,
    detect_format,
    get_template,
    score_criteria,
    score_single_criterion,
    score_so_that_statement,
    score_story,
)
from .gamification import calculate_progression, check_achievements, check_criteria_achievements
from .errors import HistoryError, InputFileError, StoryScorerError

__version__ = "0.1.0"

logger.disable("story_scorer")

__all__ = [
    "CriteriaFormat",
    "StoryInput",
    "combined_summary",
    "criterion_hint",
    "detect_format",
    "get_template",
    "score_criteria",
    "score_single_criterion",
    "score_so_that_statement",
    "score_story",
    "calculate_progression",
    "check_achievements",
    "check_criteria_achievements",
    "HistoryError",
    "InputFileError",
    "StoryScorerError",
]
