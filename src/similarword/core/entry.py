# src/similarword/core/entry.py
"""
Word entries and saved query records.

A WordEntry is identified by (word, pos, meaning_native); the word is
compared case-insensitively. meaning_external is an annotation filled in
by a translator and never part of identity.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(eq=False)
class WordEntry:
    word: str
    pos: str
    meaning_native: str
    meaning_external: str | None = None

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.word.lower(), self.pos, self.meaning_native)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordEntry):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def copy(self) -> "WordEntry":
        return replace(self)

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "pos": self.pos,
            "meaning_native": self.meaning_native,
            "meaning_external": self.meaning_external,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WordEntry":
        return cls(
            word=data["word"],
            pos=data["pos"],
            meaning_native=data["meaning_native"],
            meaning_external=data.get("meaning_external"),
        )


class SearchKind(str, Enum):
    """Which search produced a result set. The value is the label suffix."""

    SIMILAR = "similar"
    SYNONYM = "synonym"

    @property
    def tag(self) -> str:
        return f"-{self.value}"

    def label(self, word: str) -> str:
        return f"{word}{self.tag}"


def split_label(label: str) -> tuple[str, SearchKind | None]:
    """
    Recover the input word and search kind from a record label.

    "Cat-similar" -> ("Cat", SearchKind.SIMILAR)
    "cat"         -> ("cat", None)
    """
    for kind in SearchKind:
        if label.lower().endswith(kind.tag):
            return label[: -len(kind.tag)], kind
    return label, None


def dedupe(entries: list[WordEntry]) -> list[WordEntry]:
    """Drop repeated entries, keeping the first occurrence of each."""
    seen: set[WordEntry] = set()
    result = []
    for entry in entries:
        if entry in seen:
            continue
        seen.add(entry)
        result.append(entry)
    return result


@dataclass
class QueryRecord:
    label: str
    results: list[WordEntry] = field(default_factory=list)
    saved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=generate_id)

    def copy(self) -> "QueryRecord":
        return replace(self, results=[e.copy() for e in self.results])

    @property
    def word(self) -> str:
        return split_label(self.label)[0]

    @property
    def kind(self) -> SearchKind | None:
        return split_label(self.label)[1]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "saved_at": self.saved_at.isoformat(),
            "results": [e.to_dict() for e in self.results],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QueryRecord":
        saved_at = datetime.fromisoformat(data["saved_at"])
        if saved_at.tzinfo is None:
            saved_at = saved_at.replace(tzinfo=timezone.utc)
        return cls(
            label=data["label"],
            results=[WordEntry.from_dict(e) for e in data.get("results", [])],
            saved_at=saved_at,
            id=data.get("id") or generate_id(),
        )
