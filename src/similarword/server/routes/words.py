"""
Lookup routes: /api/words, /api/similar, /api/synonyms
"""

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query

from similarword.core.config import Settings, get_settings
from similarword.core.dictionary import DictionaryStore
from similarword.core.similarity import find_similar
from similarword.core.synonyms import SynonymResolver
from similarword.server.deps import get_dictionary, get_resolver


router = APIRouter(prefix="/api", tags=["words"])


@router.get("/words/{word}")
async def get_word(word: str, store: DictionaryStore = Depends(get_dictionary)):
    """Look up a single dictionary entry."""
    entry = store.find_by_word(word)
    if entry is None:
        raise HTTPException(status_code=404, detail="Word not found")
    return entry.to_dict()


@router.get("/similar")
async def similar_words(
    q: str,
    threshold: float | None = Query(default=None, ge=0.5, le=1.0),
    store: DictionaryStore = Depends(get_dictionary),
    settings: Settings = Depends(get_settings),
):
    """Words spelled like `q`."""
    if threshold is None:
        threshold = settings.SIMILARITY_THRESHOLD
    results = find_similar(q, store, threshold)
    return {
        "query": q,
        "threshold": threshold,
        "results": [e.to_dict() for e in results],
    }


@router.get("/synonyms")
async def synonyms(q: str, resolver: SynonymResolver = Depends(get_resolver)):
    """Words sharing a meaning with `q`, with external meanings if available."""
    results = await asyncio.wrap_future(resolver.submit(q))
    return {
        "query": q,
        "results": [e.to_dict() for e in results],
    }
