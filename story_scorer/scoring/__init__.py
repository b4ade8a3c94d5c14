from .models import (
    CombinedSummary,
    CriteriaFormat,
    CriteriaScoreResult,
    SingleCriterionRating,
    SingleRating,
    StoryInput,
    StoryScoreResult,
    SubScore,
)
from .story import score_story, score_so_that_statement
from .criteria import score_criteria, detect_format, criterion_hint
from .single import score_single_criterion
from .summary import combined_summary
from .templates import CriteriaTemplate, get_template, list_templates

__all__ = [
    "CombinedSummary",
    "CriteriaFormat",
    "CriteriaScoreResult",
    "SingleCriterionRating",
    "SingleRating",
    "StoryInput",
    "StoryScoreResult",
    "SubScore",
    "score_story",
    "score_so_that_statement",
    "score_criteria",
    "detect_format",
    "criterion_hint",
    "score_single_criterion",
    "combined_summary",
    "CriteriaTemplate",
    "get_template",
    "list_templates",
]
