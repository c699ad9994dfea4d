"""
Shared dependencies for routes.

Each provider is cached so the app holds one dictionary, one archive and
one resolver. Tests swap them out with app.dependency_overrides.
"""

from functools import lru_cache

import redis
from fastapi import Depends

from similarword.core.archive import QueryArchive
from similarword.core.config import Settings, get_settings
from similarword.core.dictionary import DictionaryStore
from similarword.core.synonyms import SynonymResolver
from similarword.core.translate import Translator, get_translator as build_translator


@lru_cache()
def get_redis() -> redis.Redis:
    return redis.Redis.from_url(get_settings().REDIS_URL)


@lru_cache()
def get_dictionary() -> DictionaryStore:
    return DictionaryStore.load_or_empty(get_settings().CORPUS_PATH)


@lru_cache()
def get_archive() -> QueryArchive:
    return QueryArchive(get_redis(), key=get_settings().ARCHIVE_KEY)


@lru_cache()
def get_translator() -> Translator | None:
    return build_translator(get_settings())


def get_resolver(
    store: DictionaryStore = Depends(get_dictionary),
    translator: Translator | None = Depends(get_translator),
    settings: Settings = Depends(get_settings),
) -> SynonymResolver:
    return _resolver(store, translator, settings.TRANSLATE_TIMEOUT, settings.TRANSLATE_WORKERS)


@lru_cache()
def _resolver(
    store: DictionaryStore,
    translator: Translator | None,
    timeout: float,
    workers: int,
) -> SynonymResolver:
    return SynonymResolver(store, translator, timeout=timeout, max_workers=workers)
