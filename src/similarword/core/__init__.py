from similarword.core.archive import PersistenceError, QueryArchive, SortOrder
from similarword.core.dictionary import DictionaryStore, LoadError
from similarword.core.entry import QueryRecord, SearchKind, WordEntry
from similarword.core.similarity import edit_distance, find_similar, similarity
from similarword.core.synonyms import SynonymResolver, find_synonyms
from similarword.core.translate import TranslationFailure, Translator

__all__ = [
    "DictionaryStore",
    "LoadError",
    "PersistenceError",
    "QueryArchive",
    "QueryRecord",
    "SearchKind",
    "SortOrder",
    "SynonymResolver",
    "TranslationFailure",
    "Translator",
    "WordEntry",
    "edit_distance",
    "find_similar",
    "find_synonyms",
    "similarity",
]
