"""JSON-file backed collection of game texts, keyed by id."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from .models import Text

logger = logging.getLogger(__name__)


class StoreError(Exception):
    pass


class StorageUnavailable(StoreError):
    """The backing file cannot be read or written, or the store is closed."""


class TextNotFound(StoreError):
    def __init__(self, text_id: int):
        super().__init__(f"No text with id {text_id}")
        self.text_id = text_id


class InvalidText(StoreError):
    pass


class TextStore:
    """Texts persisted to *path*; seeded from *seed_path* on first open.

    Call ``open()`` before use and ``close()`` when done (or use it as a
    context manager). Every mutation rewrites the file.
    """

    def __init__(self, path: str | Path, seed_path: str | Path | None = None):
        self.path = Path(path)
        self.seed_path = Path(seed_path) if seed_path else None
        self._texts: dict[int, Text] | None = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        if self._texts is not None:
            return
        if self.path.exists():
            texts = _read_texts(self.path)
            logger.info("[store] Loaded %d texts from %s", len(texts), self.path)
            self._texts = texts
            return
        if self.seed_path is not None and self.seed_path.exists():
            texts = _read_texts(self.seed_path)
            logger.info("[store] Seeded %d texts from %s", len(texts), self.seed_path)
        else:
            texts = {}
            logger.warning("[store] No store or seed file found; starting empty.")
        self._commit(texts)

    def close(self) -> None:
        self._texts = None
        logger.info("[store] Closed %s", self.path)

    @property
    def is_open(self) -> bool:
        return self._texts is not None

    def __enter__(self) -> "TextStore":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def list_texts(self) -> list[Text]:
        texts = self._require_open()
        return [texts[text_id] for text_id in sorted(texts)]

    def get(self, text_id: int) -> Text:
        texts = self._require_open()
        try:
            return texts[text_id]
        except KeyError:
            raise TextNotFound(text_id) from None

    def create(self, title: str, content: str) -> Text:
        title, content = _clean(title, content)
        with self._lock:
            texts = self._require_open()
            text = Text(id=max(texts, default=0) + 1, title=title, content=content)
            self._commit({**texts, text.id: text})
        logger.info("[store] Created text %d '%s'", text.id, text.title)
        return text

    def update(self, text_id: int, title: str, content: str) -> Text:
        title, content = _clean(title, content)
        with self._lock:
            texts = self._require_open()
            if text_id not in texts:
                raise TextNotFound(text_id)
            text = Text(id=text_id, title=title, content=content)
            self._commit({**texts, text_id: text})
        logger.info("[store] Updated text %d", text_id)
        return text

    def delete(self, text_id: int) -> None:
        with self._lock:
            texts = self._require_open()
            if text_id not in texts:
                raise TextNotFound(text_id)
            self._commit({k: v for k, v in texts.items() if k != text_id})
        logger.info("[store] Deleted text %d", text_id)

    # ------------------------------------------------------------------

    def _require_open(self) -> dict[int, Text]:
        if self._texts is None:
            raise StorageUnavailable(f"Text store {self.path} is not open")
        return self._texts

    def _commit(self, texts: dict[int, Text]) -> None:
        """Write *texts* to disk, then make them the current state."""
        payload = [texts[text_id].model_dump() for text_id in sorted(texts)]
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot write {self.path}: {exc}") from exc
        self._texts = texts


def _clean(title: str, content: str) -> tuple[str, str]:
    title, content = title.strip(), content.strip()
    if not title or not content:
        raise InvalidText("Title and content must not be empty")
    return title, content


def _read_texts(path: Path) -> dict[int, Text]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        texts = [Text.model_validate(item) for item in raw]
    except (OSError, ValueError, TypeError) as exc:
        # ValidationError and JSONDecodeError are both ValueErrors
        raise StorageUnavailable(f"Cannot read texts from {path}: {exc}") from exc
    by_id: dict[int, Text] = {}
    for text in texts:
        if text.id in by_id:
            raise StorageUnavailable(f"Duplicate text id {text.id} in {path}")
        by_id[text.id] = text
    return by_id
