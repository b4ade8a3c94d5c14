import json
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from ..errors import HistoryError
from ..scoring.models import CriteriaFormat


class HistoryEntry(BaseModel):
    """One completed practice round: a story plus the criteria written for it."""

    as_a: str
    i_want: str
    so_that: str
    criteria: List[str] = Field(default_factory=list)
    criteria_format: CriteriaFormat = CriteriaFormat.GHERKIN
    story_score: int
    criteria_score: int = 0
    combined_score: int
    achievements: List[str] = Field(default_factory=list)  # ids first earned in this round
    timestamp: datetime = Field(default_factory=datetime.now)


class HistoryRepository(ABC):
    """Ordered store of practice rounds, oldest first."""

    @abstractmethod
    def load(self) -> List[HistoryEntry]:
        ...

    @abstractmethod
    def append(self, entry: HistoryEntry):
        ...

    @abstractmethod
    def clear(self):
        ...


class InMemoryHistoryRepository(HistoryRepository):
    def __init__(self, entries: Optional[List[HistoryEntry]] = None):
        self._entries = list(entries or [])

    def load(self) -> List[HistoryEntry]:
        return list(self._entries)

    def append(self, entry: HistoryEntry):
        self._entries.append(entry)

    def clear(self):
        self._entries.clear()


class JsonlHistoryRepository(HistoryRepository):
    """History kept as one JSON object per line. A missing file is an empty history."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[HistoryEntry]:
        if not self.path.exists():
            return []

        entries = []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                for line_no, line in enumerate(f, start=1):
                    if not line.strip():
                        continue
                    try:
                        entries.append(HistoryEntry.model_validate(json.loads(line)))
                    except (json.JSONDecodeError, ValidationError) as e:
                        raise HistoryError(f"Corrupt history entry at {self.path}:{line_no}: {e}") from e
        except UnicodeDecodeError as e:
            raise HistoryError(f"Corrupt history file {self.path}: {e}") from e
        except OSError as e:
            raise HistoryError(f"Cannot read history file {self.path}: {e}") from e

        logger.debug(f"Loaded {len(entries)} history entries from {self.path}")
        return entries

    def append(self, entry: HistoryEntry):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(entry.model_dump_json())
                f.write('\n')
        except OSError as e:
            raise HistoryError(f"Cannot write history file {self.path}: {e}") from e

    def clear(self):
        if self.path.exists():
            self.path.unlink()


EXPORT_COLUMNS = {
    "timestamp": "Date",
    "as_a": "As a",
    "i_want": "I want",
    "so_that": "So that",
    "story_score": "Story Score",
    "criteria_score": "Criteria Score",
    "combined_score": "Combined Score",
}


def export_csv(entries: List[HistoryEntry], output_file: Path) -> int:
    """Write the history as a CSV table. Returns the number of rows written."""
    rows = [entry.model_dump(mode="json", include=set(EXPORT_COLUMNS)) for entry in entries]
    df = pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))
    df = df.rename(columns=EXPORT_COLUMNS)

    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_file, index=False)

    logger.info(f"Exported {len(df)} history rows to {output_file}")
    return len(df)
