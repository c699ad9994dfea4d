# src/similarword/core/archive.py
"""
Saved queries, stored in Redis.

The whole archive is one JSON document under a single key:

    {"version": 1, "records": [{"id", "label", "saved_at", "results": [...]}]}

It is rewritten in full on every save or delete. Labels are unique,
ignoring case.
"""

import json
import logging
import threading
from enum import Enum

import redis

from similarword.core.entry import QueryRecord, SearchKind, WordEntry


logger = logging.getLogger(__name__)

ARCHIVE_VERSION = 1
DEFAULT_KEY = "similarword:archive"


class PersistenceError(Exception):
    """The archive could not be written."""


class SortOrder(str, Enum):
    LABEL = "label"
    SAVED_AT = "saved_at"


def encode_records(records: list[QueryRecord]) -> str:
    return json.dumps(
        {"version": ARCHIVE_VERSION, "records": [r.to_dict() for r in records]},
        ensure_ascii=False,
    )


def decode_records(raw: str | bytes) -> list[QueryRecord]:
    data = json.loads(raw)
    # versionless archives were a bare list of records
    if isinstance(data, list):
        items = data
    else:
        version = data.get("version")
        if version != ARCHIVE_VERSION:
            raise ValueError(f"Unsupported archive version: {version}")
        items = data.get("records", [])
    return [QueryRecord.from_dict(item) for item in items]


class QueryArchive:
    def __init__(self, client: redis.Redis, key: str = DEFAULT_KEY):
        self.client = client
        self.key = key
        self._lock = threading.Lock()
        self._records: list[QueryRecord] = []
        # False until one read of the key has reached Redis
        self._loaded = False
        self._load()

    def _load(self) -> None:
        try:
            raw = self.client.get(self.key)
        except redis.RedisError as e:
            logger.warning("Cannot read archive %s: %s; will retry", self.key, e)
            return

        self._loaded = True
        if raw is None:
            self._records = []
            return

        try:
            self._records = decode_records(raw)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Cannot decode archive %s: %s; starting empty", self.key, e)
            self._records = []

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._load()
        if not self._loaded:
            raise PersistenceError(f"Archive {self.key} was never read; refusing to overwrite it")

    def _current(self) -> list[QueryRecord]:
        if not self._loaded:
            with self._lock:
                if not self._loaded:
                    self._load()
        return self._records

    def _write(self, records: list[QueryRecord]) -> None:
        try:
            self.client.set(self.key, encode_records(records))
        except redis.RedisError as e:
            raise PersistenceError(f"Cannot write archive {self.key}: {e}") from e

    def __len__(self) -> int:
        return len(self._current())

    def has_label(self, label: str) -> bool:
        label = label.lower()
        return any(r.label.lower() == label for r in self._current())

    def save(self, label: str, results: list[WordEntry]) -> bool:
        """
        Store a result set under `label`.

        Returns False, changing nothing, if the label is already taken.
        Raises PersistenceError if the write fails, or if the stored
        archive could not be read; the archive is then left as it was.
        """
        with self._lock:
            self._ensure_loaded()
            if self.has_label(label):
                return False

            record = QueryRecord(label=label, results=[e.copy() for e in results])
            records = self._records + [record]
            self._write(records)
            self._records = records

        logger.info("Saved %r (%d results)", label, len(record.results))
        return True

    def save_query(self, word: str, kind: SearchKind, results: list[WordEntry]) -> bool:
        return self.save(kind.label(word), results)

    def delete(self, record_id: str) -> None:
        with self._lock:
            self._ensure_loaded()
            records = [r for r in self._records if r.id != record_id]
            if len(records) == len(self._records):
                return
            self._write(records)
            self._records = records

    def get(self, record_id: str) -> QueryRecord | None:
        for record in self._current():
            if record.id == record_id:
                return record.copy()
        return None

    def find_by_label(self, label: str) -> QueryRecord | None:
        label = label.lower()
        for record in self._current():
            if record.label.lower() == label:
                return record.copy()
        return None

    def list(self, sort_by: SortOrder = SortOrder.SAVED_AT) -> list[QueryRecord]:
        records = [r.copy() for r in self._current()]
        if sort_by == SortOrder.LABEL:
            return sorted(records, key=lambda r: r.label.lower())
        return sorted(records, key=lambda r: r.saved_at, reverse=True)
