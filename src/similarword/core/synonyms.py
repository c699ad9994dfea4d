# src/similarword/core/synonyms.py
"""
Synonym candidates by shared meaning.

"happy adj. feeling joy; content" has the meanings ["feeling joy", "content"].
Any other entry whose meaning text contains one of them is a candidate:
"glad adj. content; pleased" matches on "content".

Candidates are optionally annotated by a Translator. The lookups run
concurrently; the result is assembled in discovery order once they have
all settled or the deadline has passed.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait

from similarword.core.dictionary import DictionaryStore
from similarword.core.entry import WordEntry, dedupe
from similarword.core.translate import Translator


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_WORKERS = 8


def meaning_segments(meaning: str) -> list[str]:
    segments = [s.strip() for s in meaning.split(";")]
    return [s for s in segments if s]


def collect_candidates(original: WordEntry, store: DictionaryStore) -> list[WordEntry]:
    """
    Every other entry sharing a meaning with `original`, as fresh copies.

    An entry matching several meanings appears once per match.
    """
    word = original.word.lower()
    candidates = []
    for segment in meaning_segments(original.meaning_native):
        for entry in store.scan():
            if entry.word.lower() == word:
                continue
            if segment in entry.meaning_native:
                candidates.append(entry.copy())
    return candidates


class SynonymResolver:
    """
    Finds synonyms in a dictionary and annotates them with a translator.

    With no translator, candidates are returned unannotated and nothing
    is called.
    """

    def __init__(
        self,
        store: DictionaryStore,
        translator: Translator | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = DEFAULT_WORKERS,
    ):
        self.store = store
        self.translator = translator
        self.timeout = timeout
        self.max_workers = max_workers
        self._jobs = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="synonyms")

    def resolve(self, query: str) -> list[WordEntry]:
        original = self.store.find_by_word(query)
        if original is None:
            return []

        candidates = collect_candidates(original, self.store)
        if candidates and self.translator is not None:
            self._annotate(candidates)

        return dedupe([original] + candidates)

    def submit(self, query: str) -> Future:
        """Run resolve() in the background. The future yields the result list."""
        return self._jobs.submit(self.resolve, query)

    def close(self) -> None:
        self._jobs.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "SynonymResolver":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _annotate(self, candidates: list[WordEntry]) -> None:
        pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="translate")
        try:
            futures = [pool.submit(self.translator.translate, c.word) for c in candidates]
            done, pending = wait(futures, timeout=self.timeout)
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        if pending:
            logger.warning(
                "%d of %d translations still pending after %.1fs",
                len(pending), len(futures), self.timeout,
            )

        # reassemble by position, not completion order
        for candidate, future in zip(candidates, futures):
            if future not in done:
                continue
            error = future.exception()
            if error is not None:
                logger.debug("No translation for %r: %s", candidate.word, error)
                continue
            candidate.meaning_external = future.result()


def find_synonyms(
    query: str,
    store: DictionaryStore,
    translator: Translator | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[WordEntry]:
    """One-shot resolve(); blocks until the translations have settled."""
    with SynonymResolver(store, translator, timeout=timeout) as resolver:
        return resolver.resolve(query)
