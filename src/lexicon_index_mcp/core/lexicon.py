"""
Lexicon - the single external handle over store, index and gate

Callers never touch the store or index directly; every read goes through
QueryEngine and every write through IndexBuilder, both behind one gate.
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

import psutil

from ..config import LexiconConfig, get_config
from .builder import BuildReport, IndexBuilder
from .dataset import default_entries, load_entries
from .errors import LexiconError, LexiconNotInitializedError, StoreInitFailedError
from .gate import DEFAULT_TIMEOUT, ConcurrencyGate
from .query import QueryEngine
from .state import CorpusState
from .store import Entry

logger = logging.getLogger(__name__)


class Lexicon:
    def __init__(self, config: Optional[LexiconConfig] = None):
        self.config = config or get_config()
        self._state = CorpusState()
        self.gate = ConcurrencyGate(
            write_timeout=self.config.write_timeout_seconds,
            read_timeout=self.config.read_timeout_seconds,
        )
        self.builder = IndexBuilder(self._state, self.gate, self.config.max_term_length)
        self.query = QueryEngine(self._state, self.gate, self.config.max_query_length)

    @property
    def last_report(self) -> Optional[BuildReport]:
        return self.builder.last_report

    # ----- reads -----

    def search(self, raw_term: Any, timeout: Any = DEFAULT_TIMEOUT) -> List[str]:
        return self.query.search(raw_term, timeout)

    def search_entries(self, raw_term: Any, timeout: Any = DEFAULT_TIMEOUT) -> List[Entry]:
        return self.query.search_entries(raw_term, timeout)

    def get(self, entry_id: int, timeout: Any = DEFAULT_TIMEOUT) -> Optional[Entry]:
        with self.gate.read(timeout):
            return self._state.store.get(entry_id)

    def entries(self, timeout: Any = DEFAULT_TIMEOUT) -> List[Entry]:
        """Snapshot of all live entries in insertion order"""
        with self.gate.read(timeout):
            return list(self._state.store.scan())

    # ----- writes -----

    def load(self, entries: Iterable, replace: bool = True, timeout: Any = DEFAULT_TIMEOUT) -> BuildReport:
        return self.builder.build(entries, replace=replace, timeout=timeout)

    def insert(self, term: Any, definition: Any, timeout: Any = DEFAULT_TIMEOUT) -> Entry:
        return self.builder.insert(term, definition, timeout)

    def remove(self, entry_id: int, timeout: Any = DEFAULT_TIMEOUT) -> Optional[Entry]:
        return self.builder.remove(entry_id, timeout)

    def rebuild_index(self, timeout: Any = DEFAULT_TIMEOUT) -> int:
        return self.builder.rebuild_index(timeout)

    # ----- diagnostics -----

    def check_consistency(self, timeout: Any = DEFAULT_TIMEOUT) -> List[str]:
        """List store/index disagreements; empty when consistent"""
        problems: List[str] = []
        with self.gate.read(timeout):
            store, index = self._state.store, self._state.index
            for term in index.terms():
                for entry_id in index.lookup(term):
                    entry = store.get(entry_id)
                    if entry is None:
                        problems.append(f"index[{term!r}] holds dead id {entry_id}")
                    elif entry.term != term:
                        problems.append(f"index[{term!r}] holds id {entry_id} of term {entry.term!r}")
            for entry in store.scan():
                if entry.id not in index.lookup(entry.term):
                    problems.append(f"entry {entry.id} ({entry.term!r}) missing from index")
        return problems

    def get_stats(self) -> Dict[str, Any]:
        with self.gate.read():
            store, index = self._state.store, self._state.index
            stats: Dict[str, Any] = {
                "entry_count": len(store),
                "term_count": len(index),
                "posting_count": index.posting_count(),
                "next_id": store.next_id,
            }
            report = self.builder.last_report

        stats["gate"] = self.gate.get_statistics()
        stats["last_build"] = report.to_dict() if report else None
        try:
            stats["process_rss_mb"] = psutil.Process().memory_info().rss / 1024 / 1024
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            stats["process_rss_mb"] = None
        return stats


_global_lexicon: Optional[Lexicon] = None
_lexicon_lock = threading.RLock()


def get_lexicon() -> Lexicon:
    """Global lexicon - thread safe"""
    with _lexicon_lock:
        if _global_lexicon is None:
            raise LexiconNotInitializedError("Lexicon not initialized")
        return _global_lexicon


def init_lexicon(
    entries: Optional[Iterable] = None,
    dataset_path: Optional[str] = None,
    config: Optional[LexiconConfig] = None,
) -> Lexicon:
    """Create and populate the global lexicon.

    Source precedence: explicit entries, dataset_path, configured dataset
    path, then the bundled dataset. Any failure here is StoreInitFailedError.
    """
    with _lexicon_lock:
        global _global_lexicon
        config = config or get_config()
        path = dataset_path or config.dataset_path

        try:
            lexicon = Lexicon(config)
            if entries is None:
                entries = load_entries(path) if path else default_entries()
            lexicon.load(entries)
        except LexiconError as e:
            logger.critical(f"Lexicon initialization failed: {e}")
            raise StoreInitFailedError(f"Cannot initialize lexicon store: {e}") from e

        _global_lexicon = lexicon
        return lexicon


def lexicon_exists() -> bool:
    with _lexicon_lock:
        return _global_lexicon is not None


def reset_lexicon() -> None:
    """Drop the global lexicon (mainly for testing)"""
    global _global_lexicon
    with _lexicon_lock:
        _global_lexicon = None
