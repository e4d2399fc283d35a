"""In-memory ranked store keeping each nickname's best score."""
from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from typing import Dict, List

from crystal_quest.constants import (
    LEADERBOARD_SIZE,
    MAX_SUBMITTED_SCORE,
    NICKNAME_MAX_LENGTH,
    NICKNAME_MIN_LENGTH,
)


class InvalidSubmissionError(ValueError):
    """Raised for a nickname or score the leaderboard refuses to store."""


@dataclass(frozen=True, slots=True)
class LeaderboardRow:
    nickname: str
    score: int


def normalize_nickname(raw: str | None) -> str:
    # A missing nickname normalises to "" and fails the length check.
    return str(raw if raw is not None else "").strip()[:NICKNAME_MAX_LENGTH]


def validate_nickname(raw: str | None) -> str:
    nickname = normalize_nickname(raw)
    if len(nickname) < NICKNAME_MIN_LENGTH:
        raise InvalidSubmissionError("Nickname too short")
    return nickname


def validate_score(raw: float | int) -> int:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidSubmissionError("Invalid score") from None
    if not math.isfinite(value):
        raise InvalidSubmissionError("Invalid score")
    score = math.floor(value)
    if score < 0 or score > MAX_SUBMITTED_SCORE:
        raise InvalidSubmissionError("Invalid score")
    return score


class Leaderboard:
    def __init__(self):
        self._best: Dict[str, int] = {}
        self._lock = threading.Lock()

    def submit(self, nickname: str, score: float | int) -> bool:
        """Record score for nickname if it beats the stored best. Returns True when stored."""
        name = validate_nickname(nickname)
        value = validate_score(score)
        with self._lock:
            current = self._best.get(name)
            if current is not None and value <= current:
                return False
            self._best[name] = value
            return True

    def best_for(self, nickname: str) -> int | None:
        return self._best.get(normalize_nickname(nickname))

    def top(self, limit: int = LEADERBOARD_SIZE) -> List[LeaderboardRow]:
        # Highest score first; equal scores in reverse nickname order, like a reversed sorted-set range.
        with self._lock:
            ordered = sorted(self._best.items(), key=lambda item: (item[1], item[0]), reverse=True)
        return [LeaderboardRow(nickname=name, score=value) for name, value in ordered[:max(limit, 0)]]
