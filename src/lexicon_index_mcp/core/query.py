"""Query Engine - exact-term lookup under a read permit."""

import logging
from typing import Any, List

from .errors import QueryRejectedError
from .gate import DEFAULT_TIMEOUT, ConcurrencyGate
from .index import normalize
from .state import CorpusState
from .store import Entry

logger = logging.getLogger(__name__)


class QueryEngine:
    def __init__(self, state: CorpusState, gate: ConcurrencyGate, max_query_length: int = 256):
        self.state = state
        self.gate = gate
        self.max_query_length = max_query_length

    def search(self, raw_term: Any, timeout: Any = DEFAULT_TIMEOUT) -> List[str]:
        """Definitions for the term, first-inserted first; [] when nothing matches"""
        return [entry.definition for entry in self.search_entries(raw_term, timeout)]

    def search_entries(self, raw_term: Any, timeout: Any = DEFAULT_TIMEOUT) -> List[Entry]:
        term = self._validate(raw_term)

        with self.gate.read(timeout):
            store = self.state.store
            ids = self.state.index.lookup(term)
            # Consistent under the permit, so every id resolves
            entries = [store.get(entry_id) for entry_id in ids]

        results = [entry for entry in entries if entry is not None]
        logger.debug(f"Query {term!r}: {len(results)} matches")
        return results

    def _validate(self, raw_term: Any) -> str:
        if not isinstance(raw_term, str):
            raise QueryRejectedError(f"Query must be a string, got {type(raw_term).__name__}")
        term = normalize(raw_term)
        if not term:
            raise QueryRejectedError("Query is empty")
        if len(term) > self.max_query_length:
            raise QueryRejectedError(f"Query exceeds {self.max_query_length} characters")
        return term
