"""Centralised runtime configuration loaded from environment variables."""

import os
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parent

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

TEXTS_PATH: str = os.getenv("TEXTS_PATH", "texts_store.json")
SEED_TEXTS_PATH: str = os.getenv("SEED_TEXTS_PATH", str(_PACKAGE_DIR / "texts.json"))

# Level 1 vocabulary: words of 2..5 characters, ten pairs on the board
SAMPLE_MIN_LEN: int = int(os.getenv("SAMPLE_MIN_LEN", "2"))
SAMPLE_MAX_LEN: int = int(os.getenv("SAMPLE_MAX_LEN", "5"))
SAMPLE_COUNT: int = int(os.getenv("SAMPLE_COUNT", "10"))

# Candidate pools larger than this are drawn through a cumulative-weight index
CUMULATIVE_INDEX_THRESHOLD: int = int(os.getenv("CUMULATIVE_INDEX_THRESHOLD", "256"))

MAX_PARAGRAPHS: int = int(os.getenv("MAX_PARAGRAPHS", "2"))
