"""
Workout History
===============

Append-only stores for completed session summaries.
"""

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import List

from .models import SessionSummary

logger = logging.getLogger(__name__)


class HistoryStore(ABC):
    """Append-only list of session summaries."""

    @abstractmethod
    def append(self, summary: SessionSummary) -> None:
        """Add one summary to the end of the history."""

    @abstractmethod
    def all(self) -> List[SessionSummary]:
        """Return every summary, oldest first."""


class InMemoryHistoryStore(HistoryStore):
    def __init__(self):
        self._items: List[SessionSummary] = []

    def append(self, summary: SessionSummary) -> None:
        self._items.append(summary)

    def all(self) -> List[SessionSummary]:
        return list(self._items)


class JsonHistoryStore(HistoryStore):
    """
    History kept as a JSON array in a single file.

    Attributes:
        path (str): File holding the summaries
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> list:
        if not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, list):
            raise ValueError(f"{self.path} does not contain a JSON list")
        return data

    def append(self, summary: SessionSummary) -> None:
        with self._lock:
            items = self._read()
            items.append(summary.to_dict())
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as handle:
                json.dump(items, handle, indent=2)
            os.replace(tmp_path, self.path)
        logger.info("Saved workout %s (%d/%d) to %s",
                    summary.exercise_name, summary.reps, summary.target_reps, self.path)

    def all(self) -> List[SessionSummary]:
        with self._lock:
            return [SessionSummary.from_dict(item) for item in self._read()]
