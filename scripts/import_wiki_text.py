#!/usr/bin/env python3
"""Import the introduction of a Hebrew Wikipedia article as a game text.

Usage:
    python scripts/import_wiki_text.py "ירושלים"          # import one article
    python scripts/import_wiki_text.py --random           # import a random article
    python scripts/import_wiki_text.py "חיפה" --paragraphs 3

Texts are appended to the store file configured by TEXTS_PATH.
"""

import argparse
import asyncio
import logging

from gapgame import config
from gapgame.store import TextStore
from gapgame.wiki import fetch_intro, fetch_random_title

logger = logging.getLogger("gapgame.import")


async def fetch_text(title: str | None, max_paragraphs: int) -> dict[str, str]:
    if title is None:
        title = await fetch_random_title()
    logger.info("[import] Fetching '%s' …", title)
    return await fetch_intro(title, max_paragraphs=max_paragraphs)


def import_text(store: TextStore, data: dict[str, str]) -> int:
    text = store.create(data["title"], data["content"])
    return text.id


def main() -> None:
    parser = argparse.ArgumentParser(description="Import a Wikipedia intro as a game text.")
    parser.add_argument("title", nargs="?", help="Article title on he.wikipedia.org")
    parser.add_argument(
        "--random",
        action="store_true",
        help="Pick a random article instead of TITLE.",
    )
    parser.add_argument(
        "--paragraphs",
        type=int,
        default=config.MAX_PARAGRAPHS,
        help="Number of intro paragraphs to keep (default: %(default)s)",
    )
    args = parser.parse_args()
    if not args.random and not args.title:
        parser.error("give an article TITLE or --random")

    logging.basicConfig(level=config.LOG_LEVEL, format="%(message)s")

    data = asyncio.run(fetch_text(None if args.random else args.title, args.paragraphs))
    with TextStore(config.TEXTS_PATH, config.SEED_TEXTS_PATH) as store:
        text_id = import_text(store, data)
    logger.info("[import] Saved '%s' as text %d → %s", data["title"], text_id, config.TEXTS_PATH)


if __name__ == "__main__":
    main()
