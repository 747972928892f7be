"""Level progression: time limits and answer checking for the gap levels."""

import math
from typing import Sequence

from .models import AnswerReport, GapCheck, GapSpan

# 1: memory pairs, 2: gaps with a stopwatch, 3-4: gaps against the clock
LEVEL_COUNT = 4
TIMED_LEVELS = (3, 4)

DEFAULT_PREVIOUS_SECONDS = 300
MIN_TIME_LIMIT = 20
TIME_FACTOR = 0.9


def time_limit(previous_seconds: int | None = None) -> int:
    """Seconds allowed for a timed level: 10% less than the previous level took."""
    if previous_seconds is None:
        previous_seconds = DEFAULT_PREVIOUS_SECONDS
    return max(math.floor(previous_seconds * TIME_FACTOR), MIN_TIME_LIMIT)


def level_time_limit(level: int, previous_seconds: int | None = None) -> int | None:
    """Time limit for *level*, or None when the level is not timed."""
    if not 1 <= level <= LEVEL_COUNT:
        raise ValueError(f"Unknown level {level}")
    if level not in TIMED_LEVELS:
        return None
    return time_limit(previous_seconds)


def check_answer(word: str, answer: str) -> GapCheck:
    letters = [i < len(answer) and answer[i] == letter for i, letter in enumerate(word)]
    return GapCheck(word=word, letters=letters, correct=answer == word)


def check_answers(positions: Sequence[GapSpan], answers: Sequence[str]) -> AnswerReport:
    """Compare each gap with the player's answer; missing answers count as empty."""
    ordered = sorted(positions, key=lambda s: s.start)
    gaps = [
        check_answer(span.word, answers[i] if i < len(answers) else "")
        for i, span in enumerate(ordered)
    ]
    return AnswerReport(gaps=gaps, all_correct=all(g.correct for g in gaps))
