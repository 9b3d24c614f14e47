from __future__ import annotations

import json
import logging
import os
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_BEST_SCORE_PATH = os.path.join(os.path.expanduser("~"), ".bubble2048", "best_score.json")


class MemoryScoreStore:
    """Keeps the best score for the lifetime of the process only."""

    def __init__(self, best_score: int = 0) -> None:
        self.best_score = int(best_score)

    def load(self) -> int:
        return self.best_score

    def save(self, score: int) -> None:
        self.best_score = int(score)


class BestScoreStore:
    """Best score persisted as a small JSON document.

    Storage problems never reach gameplay: an unreadable file loads as 0 and a
    failed write is skipped.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or DEFAULT_BEST_SCORE_PATH

    def load(self) -> int:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
            return max(0, int(data.get("best_score", 0)))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Could not read best score from %s: %s", self.path, exc)
            return 0

    def save(self, score: int) -> None:
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = self.path + ".tmp"
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump({"best_score": int(score)}, fh)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.warning("Could not write best score to %s: %s", self.path, exc)
