# src/similarword/core/dictionary.py
"""
Dictionary corpus loading and lookup.

Corpus format, one entry per line:

    cat n.a small domesticated feline
    glad adj. content; pleased

word, then whitespace, then "<pos>.<meaning>; <meaning>; ...".
Lines that don't fit this shape are skipped.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator

from similarword.core.entry import WordEntry


logger = logging.getLogger(__name__)


class LoadError(Exception):
    """Corpus source could not be read or decoded."""


def parse_line(line: str) -> WordEntry | None:
    """Parse one corpus line, or return None if it is malformed."""
    parts = line.strip().split(None, 1)
    if len(parts) != 2:
        return None

    word, rest = parts
    pos, dot, meaning = rest.partition(".")
    if not dot:
        return None

    pos = pos.strip()
    meaning = meaning.strip()
    if not pos or not meaning:
        return None

    return WordEntry(word=word, pos=pos, meaning_native=meaning)


def parse_lines(lines: Iterable[str]) -> list[WordEntry]:
    entries = []
    skipped = 0
    for line in lines:
        if not line.strip():
            continue
        entry = parse_line(line)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    if skipped:
        logger.debug("Skipped %d malformed corpus lines", skipped)
    return entries


def load_entries(source: Path | str) -> list[WordEntry]:
    """Read and parse a corpus file. Raises LoadError if it can't be read."""
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Cannot load corpus {path}: {e}") from e
    return parse_lines(text.splitlines())


class DictionaryStore:
    """
    Read-only, in-memory word corpus.

    Entries keep their load order. Everything handed out is a copy, so
    callers can annotate results without touching the corpus.
    """

    def __init__(self, entries: Iterable[WordEntry] = ()):
        self._entries: tuple[WordEntry, ...] = tuple(e.copy() for e in entries)
        self._index: dict[str, int] = {}
        for i, entry in enumerate(self._entries):
            # first-loaded wins
            self._index.setdefault(entry.word.lower(), i)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "DictionaryStore":
        return cls(parse_lines(lines))

    @classmethod
    def load(cls, source: Path | str) -> "DictionaryStore":
        store = cls(load_entries(source))
        logger.info("Loaded %d entries from %s", len(store), source)
        return store

    @classmethod
    def load_or_empty(cls, source: Path | str) -> "DictionaryStore":
        """Like load(), but an unreadable corpus gives an empty store."""
        try:
            return cls.load(source)
        except LoadError as e:
            logger.warning("%s; continuing with an empty dictionary", e)
            return cls()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WordEntry]:
        for entry in self._entries:
            yield entry.copy()

    def entries(self) -> list[WordEntry]:
        return list(self)

    def scan(self) -> tuple[WordEntry, ...]:
        """The corpus itself, for matchers. Callers must not mutate it."""
        return self._entries

    def index_of(self, word: str) -> int | None:
        """Position of the first entry spelled `word`, ignoring case."""
        return self._index.get(word.lower())

    def find_by_word(self, word: str) -> WordEntry | None:
        i = self.index_of(word)
        if i is None:
            return None
        return self._entries[i].copy()
