from .repository import (
    HistoryEntry,
    HistoryRepository,
    InMemoryHistoryRepository,
    JsonlHistoryRepository,
    export_csv,
)
from .session import PracticeSession, RoundResult, StoryRound

__all__ = [
    "HistoryEntry",
    "HistoryRepository",
    "InMemoryHistoryRepository",
    "JsonlHistoryRepository",
    "export_csv",
    "PracticeSession",
    "RoundResult",
    "StoryRound",
]
