from pydantic import BaseModel, Field


class Text(BaseModel):
    id: int = Field(gt=0)
    title: str
    content: str


class TextIn(BaseModel):
    title: str
    content: str


class SelectedText(BaseModel):
    title: str
    content: str


class SelectedWord(BaseModel):
    word: str
    source_title: str


class GameRound(BaseModel):
    words: list[SelectedWord]
    selected_text: SelectedText


class GapSpan(BaseModel):
    start: int   # inclusive offset into the original content
    end: int     # exclusive
    word: str


class TextWithGaps(BaseModel):
    title: str
    content: str                    # redacted, gaps filled with "_"
    gap_words: list[str]
    gap_positions: list[GapSpan]    # ascending by start


class GapsRequest(BaseModel):
    text: SelectedText
    words: list[str]


class GapCheck(BaseModel):
    word: str
    letters: list[bool]
    correct: bool


class AnswerReport(BaseModel):
    gaps: list[GapCheck]
    all_correct: bool


class CheckRequest(BaseModel):
    gap_positions: list[GapSpan]
    answers: list[str]


class TimeLimitResponse(BaseModel):
    level: int
    seconds: int | None = None   # None for untimed levels
