"""Frequency-weighted vocabulary sampling for the memory level.

Words are drawn without replacement; every draw picks a remaining candidate
with probability proportional to how often it occurs in the text.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from . import config
from .models import GameRound, SelectedText, SelectedWord, Text

logger = logging.getLogger(__name__)

# Words are separated by whitespace, commas and periods
_SPLIT_RE = re.compile(r"[\s,.]+")


class RandomSource(Protocol):
    """Anything with a uniform ``random()`` in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float: ...


@dataclass
class WordCandidate:
    word: str
    frequency: int


def extract_words(content: str, min_len: int, max_len: int) -> list[str]:
    """Split *content* into words and keep those of length min_len..max_len."""
    words: list[str] = []
    for raw in _SPLIT_RE.split(content):
        word = raw.strip()
        if word and min_len <= len(word) <= max_len:
            words.append(word)
    return words


def build_candidates(words: Iterable[str]) -> list[WordCandidate]:
    """Count exact occurrences; most frequent first, ties in first-seen order."""
    counts: dict[str, int] = {}
    for word in words:
        counts[word] = counts.get(word, 0) + 1
    candidates = [WordCandidate(word, freq) for word, freq in counts.items()]
    candidates.sort(key=lambda c: c.frequency, reverse=True)
    return candidates


class CumulativeWeightIndex:
    """Binary indexed tree over candidate weights.

    ``find`` returns the same position a left-to-right scan of the non-zero
    weights would stop at, so swapping it in for the scan does not change
    which word a given draw selects.
    """

    def __init__(self, weights: Sequence[int]):
        self._size = len(weights)
        self._tree = [0] * (self._size + 1)
        self._weights = [0] * self._size
        self.total = 0
        for i, weight in enumerate(weights):
            self.add(i, weight)

    def add(self, index: int, delta: int) -> None:
        self._weights[index] += delta
        self.total += delta
        i = index + 1
        while i <= self._size:
            self._tree[i] += delta
            i += i & -i

    def remove(self, index: int) -> None:
        self.add(index, -self._weights[index])

    def find(self, target: float) -> int:
        """First position with a positive weight whose running sum is >= target."""
        if self._size == 0:
            raise IndexError("find on an empty index")
        pos = 0
        acc = 0
        step = 1 << (self._size.bit_length() - 1)
        while step:
            nxt = pos + step
            if nxt <= self._size:
                reached = acc + self._tree[nxt]
                # A zero target must land on the first entry that still has weight
                if reached < target or (target <= 0 and reached <= 0):
                    pos = nxt
                    acc = reached
            step >>= 1
        return min(pos, self._size - 1)


def _draw_linear(
    candidates: Sequence[WordCandidate], count: int, rng: RandomSource
) -> list[WordCandidate]:
    pool = list(candidates)
    chosen: list[WordCandidate] = []
    while pool and len(chosen) < count:
        total = sum(c.frequency for c in pool)
        target = rng.random() * total
        running = 0
        picked = len(pool) - 1
        for i, cand in enumerate(pool):
            running += cand.frequency
            if running >= target:
                picked = i
                break
        chosen.append(pool.pop(picked))
    return chosen


def _draw_indexed(
    candidates: Sequence[WordCandidate], count: int, rng: RandomSource
) -> list[WordCandidate]:
    index = CumulativeWeightIndex([c.frequency for c in candidates])
    chosen: list[WordCandidate] = []
    while index.total > 0 and len(chosen) < count:
        target = rng.random() * index.total
        picked = index.find(target)
        chosen.append(candidates[picked])
        index.remove(picked)
    return chosen


def draw_without_replacement(
    candidates: Sequence[WordCandidate],
    count: int,
    rng: RandomSource,
    use_index: bool | None = None,
) -> list[WordCandidate]:
    """Draw up to *count* candidates, each at most once, weighted by frequency.

    use_index=None picks the cumulative index only for large pools.
    """
    if use_index is None:
        use_index = len(candidates) > config.CUMULATIVE_INDEX_THRESHOLD
    if use_index:
        return _draw_indexed(candidates, count, rng)
    return _draw_linear(candidates, count, rng)


def sample(
    corpus: Text,
    min_len: int,
    max_len: int,
    count: int,
    rng: RandomSource | None = None,
) -> list[SelectedWord]:
    """Pick up to *count* distinct words of *corpus*, favouring frequent ones.

    Returns fewer words (possibly none) when the text has too few eligible
    words; invalid bounds yield an empty list.
    """
    if count <= 0 or min_len > max_len:
        logger.debug(
            "[sampler] Nothing to draw (min_len=%d, max_len=%d, count=%d)",
            min_len, max_len, count,
        )
        return []
    if rng is None:
        rng = random.Random()

    candidates = build_candidates(extract_words(corpus.content, min_len, max_len))
    drawn = draw_without_replacement(candidates, count, rng)
    if len(drawn) < count:
        logger.info(
            "[sampler] '%s' has only %d eligible words (%d requested)",
            corpus.title, len(drawn), count,
        )
    return [SelectedWord(word=c.word, source_title=corpus.title) for c in drawn]


def pick_text(texts: Sequence[Text], rng: RandomSource | None = None) -> Text | None:
    """Uniformly choose one text, or None when there is nothing to choose from."""
    if not texts:
        return None
    if rng is None:
        rng = random.Random()
    return texts[min(int(rng.random() * len(texts)), len(texts) - 1)]


def new_round(
    texts: Sequence[Text],
    min_len: int = config.SAMPLE_MIN_LEN,
    max_len: int = config.SAMPLE_MAX_LEN,
    count: int = config.SAMPLE_COUNT,
    rng: RandomSource | None = None,
) -> GameRound:
    """Choose a text at random and sample the memory-level words from it."""
    if rng is None:
        rng = random.Random()
    text = pick_text(texts, rng)
    if text is None:
        logger.warning("[sampler] No texts available for a new round.")
        return GameRound(words=[], selected_text=SelectedText(title="", content=""))
    words = sample(text, min_len, max_len, count, rng)
    logger.info("[sampler] New round from '%s' with %d words", text.title, len(words))
    return GameRound(
        words=words,
        selected_text=SelectedText(title=text.title, content=text.content),
    )
