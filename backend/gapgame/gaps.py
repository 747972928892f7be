"""Gap placement: find the sampled words in their text and blank them out."""

import logging
import re
from dataclasses import dataclass
from typing import Literal, Sequence

from .models import GapSpan, SelectedText, Text, TextWithGaps

logger = logging.getLogger(__name__)

PLACEHOLDER = "_"

# Whitespace runs and single , . ! ? are kept as their own tokens
_DELIM_RE = re.compile(r"(\s+|[,.!?])")


@dataclass
class Token:
    type: Literal["word", "sep"]
    value: str
    start: int


def tokenize(content: str) -> list[Token]:
    """Split *content* losslessly: joining the token values gives it back."""
    tokens: list[Token] = []
    pos = 0
    for part in _DELIM_RE.split(content):
        if not part:
            continue
        kind = "sep" if _DELIM_RE.fullmatch(part) else "word"
        tokens.append(Token(type=kind, value=part, start=pos))
        pos += len(part)
    return tokens


def find_spans(content: str, words: Sequence[str]) -> list[GapSpan]:
    """First whole-token occurrence of each word, in text order.

    A word is matched at most once; later occurrences stay visible.
    """
    remaining = set(words)
    spans: list[GapSpan] = []
    for tok in tokenize(content):
        if not remaining:
            break
        trimmed = tok.value.strip()
        if trimmed and trimmed in remaining:
            spans.append(
                GapSpan(start=tok.start, end=tok.start + len(tok.value), word=trimmed)
            )
            remaining.discard(trimmed)
    return spans


def redact(content: str, spans: Sequence[GapSpan]) -> str:
    # Right to left so earlier offsets stay valid
    for span in sorted(spans, key=lambda s: s.start, reverse=True):
        content = (
            content[: span.start]
            + PLACEHOLDER * len(span.word)
            + content[span.end :]
        )
    return content


def locate(text: Text | SelectedText, target_words: Sequence[str]) -> TextWithGaps:
    """Blank the first occurrence of each target word in *text*.

    Words missing from the text are dropped from ``gap_words``; an empty word
    list or an empty text simply yields no gaps.
    """
    spans = find_spans(text.content, target_words)
    found = {span.word for span in spans}
    gap_words = [word for word in target_words if word in found]
    if len(found) < len(set(target_words)):
        logger.debug(
            "[gaps] %d of %d words not found in '%s'",
            len(set(target_words)) - len(found), len(set(target_words)), text.title,
        )
    return TextWithGaps(
        title=text.title,
        content=redact(text.content, spans),
        gap_words=gap_words,
        gap_positions=sorted(spans, key=lambda s: s.start),
    )


def restore(result: TextWithGaps) -> str:
    """Write every gap word back into the redacted content."""
    content = result.content
    for span in result.gap_positions:
        content = content[: span.start] + span.word + content[span.end :]
    return content


def split_parts(content: str, positions: Sequence[GapSpan]) -> list[str]:
    """Text fragments around the gaps: one before each gap plus the tail.

    The level pages render these with an input box between consecutive parts.
    """
    parts: list[str] = []
    last_end = 0
    for span in sorted(positions, key=lambda s: s.start):
        parts.append(content[last_end : span.start])
        last_end = span.end
    parts.append(content[last_end:])
    return parts
