"""
Core module - in-memory dictionary index

Entry store + inverted index behind one reader-writer gate.
"""

from .builder import BuildReport, IndexBuilder, SkippedEntry
from .errors import (InvalidInputError, LexiconError, LexiconNotInitializedError,
                     LockTimeoutError, QueryRejectedError, StoreInitFailedError)
from .gate import ConcurrencyGate, GateState
from .index import InvertedIndex, normalize
from .lexicon import Lexicon, get_lexicon, init_lexicon, lexicon_exists, reset_lexicon
from .query import QueryEngine
from .store import Entry, EntryStore

__all__ = [
    "Entry",
    "EntryStore",
    "InvertedIndex",
    "normalize",
    "IndexBuilder",
    "BuildReport",
    "SkippedEntry",
    "QueryEngine",
    "ConcurrencyGate",
    "GateState",
    "Lexicon",
    "get_lexicon",
    "init_lexicon",
    "lexicon_exists",
    "reset_lexicon",
    "LexiconError",
    "InvalidInputError",
    "QueryRejectedError",
    "LockTimeoutError",
    "StoreInitFailedError",
    "LexiconNotInitializedError",
]
