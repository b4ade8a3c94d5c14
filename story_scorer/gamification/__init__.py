from .achievements import (
    AchievementRecord,
    CATALOG,
    check_achievements,
    check_criteria_achievements,
)
from .progression import LEVELS, Progression, ProgressionLevel, calculate_progression, progress_to_next

__all__ = [
    "AchievementRecord",
    "CATALOG",
    "check_achievements",
    "check_criteria_achievements",
    "LEVELS",
    "Progression",
    "ProgressionLevel",
    "calculate_progression",
    "progress_to_next",
]
