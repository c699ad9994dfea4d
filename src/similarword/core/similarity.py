# src/similarword/core/similarity.py
"""
Spelling similarity by Levenshtein edit distance.

    similarity = 1 - distance / max(len(a), len(b))

Results keep corpus order; they are filtered by score, not ranked.
Exact matches always clear the bar (similarity 1.0), so a query that is
a dictionary word is moved to the front rather than added.
"""

from similarword.core.dictionary import DictionaryStore
from similarword.core.entry import WordEntry


MIN_THRESHOLD = 0.5
MAX_THRESHOLD = 1.0


def edit_distance(a: str, b: str) -> int:
    """Insertions, deletions and substitutions each cost 1."""
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], previous[j], current[j - 1]) + 1)
        previous = current

    return previous[-1]


def similarity(a: str, b: str) -> float:
    # lengths after lowercasing; "İ".lower() is two characters
    a, b = a.lower(), b.lower()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - edit_distance(a, b) / longest


def check_threshold(threshold: float) -> float:
    if not MIN_THRESHOLD <= threshold <= MAX_THRESHOLD:
        raise ValueError(
            f"threshold must be between {MIN_THRESHOLD} and {MAX_THRESHOLD}, got {threshold}"
        )
    return threshold


def find_similar(query: str, store: DictionaryStore, threshold: float) -> list[WordEntry]:
    """
    Entries whose spelling is at least `threshold` similar to `query`.

    If the query is itself a dictionary word, that entry comes first.
    """
    check_threshold(threshold)

    exact = store.index_of(query)
    results = []
    for i, entry in enumerate(store.scan()):
        if i == exact:
            continue
        if similarity(entry.word, query) >= threshold:
            results.append(entry.copy())

    if exact is not None:
        results.insert(0, store.scan()[exact].copy())
    return results
