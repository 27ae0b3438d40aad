import logging
import re
from dataclasses import dataclass
from pathlib import Path

import httpx

from letterbox.puzzle import PuzzleError
from letterbox.trie import Trie

logger = logging.getLogger("letterbox")

SIDES_RE = re.compile(r'"sides":\[(?P<sides>["A-Za-z,]+)\]')
DICTIONARY_RE = re.compile(r'"dictionary":\[(?P<words>["A-Za-z,]+)\]')


@dataclass
class LivePuzzle:
    sides: list[str]
    words: list[str]


def parse_words(text: str, min_length: int = 3) -> list[str]:
    """Keep lowercase-initial alphabetic entries; drops proper names and short words."""
    words = []
    for line in text.splitlines():
        word = line.strip()
        if len(word) >= min_length and word.isalpha() and word[0].islower():
            words.append(word)
    return words


def load_words(path: str | Path, min_length: int = 3) -> list[str]:
    with open(path, "r", encoding="utf-8") as f:
        words = parse_words(f.read(), min_length)
    logger.info("Loaded %d words from %s", len(words), path)
    return words


async def fetch_words(url: str, min_length: int = 3, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None) -> list[str]:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            resp = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to fetch word list from %s: %s", url, e)
            raise
    words = parse_words(resp.text, min_length)
    logger.info("Fetched %d words from %s", len(words), url)
    return words


def _split_quoted(raw: str) -> list[str]:
    return [item.lower() for item in raw.replace('"', "").split(",") if item]


def parse_live_puzzle(html: str) -> LivePuzzle:
    """Pull the four sides and the accepted-word list out of the puzzle page."""
    sides_match = SIDES_RE.search(html)
    words_match = DICTIONARY_RE.search(html)
    if not sides_match or not words_match:
        raise PuzzleError("Could not find sides and dictionary in puzzle page")
    return LivePuzzle(
        sides=_split_quoted(sides_match.group("sides")),
        words=_split_quoted(words_match.group("words")),
    )


async def fetch_live_puzzle(url: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None) -> LivePuzzle:
    async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
        try:
            resp = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to fetch puzzle page %s: %s", url, e)
            raise
    puzzle = parse_live_puzzle(resp.text)
    logger.info("Live puzzle sides=%s (%d words)", "-".join(puzzle.sides), len(puzzle.words))
    return puzzle


def save_trie(trie: Trie, path: str | Path):
    Path(path).write_text(trie.serialize(), encoding="utf-8")
    logger.info("Saved trie to %s", path)


def load_trie(path: str | Path) -> Trie:
    trie = Trie.deserialize(Path(path).read_text(encoding="utf-8"))
    logger.info("Loaded trie from %s", path)
    return trie
