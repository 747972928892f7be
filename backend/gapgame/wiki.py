"""Hebrew Wikipedia intro fetch, used to import new game texts."""

import re

import httpx
from bs4 import BeautifulSoup

_API_URL = "https://he.wikipedia.org/w/api.php"
_HEADERS = {
    "User-Agent": "GapGame/1.0 (https://github.com/local/gapgame; educational)"
}

# Paragraphs shorter than this are captions or stubs, not prose
_MIN_PARA_LEN = 50


async def _get_json(params: dict, client: httpx.AsyncClient | None, timeout: float) -> dict:
    if client is not None:
        resp = await client.get(_API_URL, params=params)
        resp.raise_for_status()
        return resp.json()
    async with httpx.AsyncClient(timeout=timeout, headers=_HEADERS) as own_client:
        resp = await own_client.get(_API_URL, params=params)
        resp.raise_for_status()
        return resp.json()


async def fetch_random_title(client: httpx.AsyncClient | None = None) -> str:
    """Return the title of a random Hebrew Wikipedia article (main namespace)."""
    params = {
        "action": "query",
        "list": "random",
        "rnnamespace": "0",
        "rnlimit": "1",
        "format": "json",
        "formatversion": "2",
    }
    data = await _get_json(params, client, timeout=10.0)
    return data["query"]["random"][0]["title"]


async def fetch_intro(
    title: str, max_paragraphs: int = 2, client: httpx.AsyncClient | None = None
) -> dict[str, str]:
    """Fetch the introduction section of a Hebrew Wikipedia article.

    Returns {"title": <canonical title>, "content": <cleaned text>}.
    Raises httpx.HTTPError on transport failure and ValueError when the
    article is missing or has no usable prose.
    """
    params = {
        "action": "parse",
        "page": title,
        "prop": "text",
        "formatversion": "2",
        "format": "json",
        "section": "0",
    }
    data = await _get_json(params, client, timeout=15.0)

    if "error" in data:
        raise ValueError(f"MediaWiki error: {data['error'].get('info', data['error'])}")

    canonical_title: str = data["parse"]["title"]
    html: str = data["parse"]["text"]
    content = _extract_intro(html, max_paragraphs=max_paragraphs)

    return {"title": canonical_title, "content": content}


# CSS classes that hold navigation, hatnotes, infoboxes and maintenance banners
_SKIP_PARENT_CLASSES = {
    "hatnote",
    "dablink",
    "rellink",
    "ambox",
    "infobox",
    "navbox",
    "notice",
    "plainlist",
    "thumb",
    "mw-empty-elt",
}


def _is_in_skipped_container(tag) -> bool:
    for parent in tag.parents:
        classes = parent.get("class") or []
        if any(c in _SKIP_PARENT_CLASSES for c in classes):
            return True
    return False


def _extract_intro(html: str, max_paragraphs: int = 2) -> str:
    """Parse MediaWiki HTML and keep the first clean prose paragraphs."""
    soup = BeautifulSoup(html, "lxml")

    paragraphs: list[str] = []
    for p in soup.find_all("p"):
        if len(paragraphs) >= max_paragraphs:
            break

        if _is_in_skipped_container(p):
            continue

        # Citation superscripts
        for sup in p.find_all("sup"):
            sup.decompose()

        text = p.get_text()

        # Bracket markers like [1], [דרוש מקור]
        text = re.sub(r"\[[^\]]{0,40}\]", "", text)
        text = re.sub(r"<[^>]{0,200}>", "", text)
        text = re.sub(r"\s+", " ", text).strip()

        if len(text) >= _MIN_PARA_LEN:
            paragraphs.append(text)

    if not paragraphs:
        raise ValueError("No usable paragraphs found in Wikipedia article")

    return "\n\n".join(paragraphs)
