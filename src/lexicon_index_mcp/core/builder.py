"""
Index Builder - every mutation of the corpus goes through here

Batch builds are validated outside the gate, then applied under the
write lock in one pass. A reader sees the whole batch or none of it.
Bad items are skipped and recorded, never allowed to abort the batch.
"""

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidInputError
from .gate import DEFAULT_TIMEOUT, ConcurrencyGate
from .hashing import corpus_fingerprint
from .index import InvertedIndex, normalize
from .state import CorpusState
from .store import Entry, EntryStore

logger = logging.getLogger(__name__)

# (normalized term, raw term, definition)
PreparedEntry = Tuple[str, str, str]


@dataclass
class SkippedEntry:
    position: int
    term: Optional[str]
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"position": self.position, "term": self.term, "reason": self.reason}


@dataclass
class BuildReport:
    total: int
    indexed: int
    replaced: bool
    fingerprint: str
    build_time: float
    skipped: List[SkippedEntry] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "indexed": self.indexed,
            "skipped_count": len(self.skipped),
            "skipped": [s.to_dict() for s in self.skipped],
            "replaced": self.replaced,
            "fingerprint": self.fingerprint,
            "build_time": self.build_time,
        }


def prepare_entry(item: Any, max_term_length: int = 256) -> PreparedEntry:
    """Validate one raw item and normalize its term.

    Accepts a (term, definition) pair or a mapping with ``term`` (or
    ``word``) and ``definition`` keys.
    """
    if isinstance(item, Mapping):
        raw_term = item.get("term", item.get("word"))
        definition = item.get("definition")
    elif isinstance(item, (tuple, list)) and len(item) == 2:
        raw_term, definition = item
    else:
        raise InvalidInputError("Entry must be a (term, definition) pair or mapping")

    if not isinstance(raw_term, str):
        raise InvalidInputError("Term must be a string")
    if not isinstance(definition, str):
        raise InvalidInputError("Definition must be a string")

    term = normalize(raw_term)
    if not term:
        raise InvalidInputError("Term is empty")
    if len(term) > max_term_length:
        raise InvalidInputError(f"Term exceeds {max_term_length} characters")

    return term, raw_term.strip(), definition


class IndexBuilder:
    """Writes the Entry Store and Inverted Index under the gate's write lock"""

    def __init__(self, state: CorpusState, gate: ConcurrencyGate, max_term_length: int = 256):
        self.state = state
        self.gate = gate
        self.max_term_length = max_term_length
        # Report of the batch that produced the live corpus
        self.last_report: Optional[BuildReport] = None

    def build(self, entries: Iterable, replace: bool = True, timeout: Any = DEFAULT_TIMEOUT) -> BuildReport:
        """Bulk load a batch.

        replace=True swaps in a fresh corpus, replace=False appends.
        """
        start_time = time.time()
        prepared, skipped = self._prepare_batch(entries)
        fingerprint = corpus_fingerprint((term, definition) for term, _, definition in prepared)

        with self.gate.write(timeout):
            if replace:
                # Ids keep counting from the live store so they are never reused
                store = EntryStore(start_id=self.state.store.next_id)
                index = InvertedIndex()
                _apply(prepared, store, index)
                self.state.store = store
                self.state.index = index
            else:
                _apply(prepared, self.state.store, self.state.index)

            report = BuildReport(
                total=len(prepared) + len(skipped),
                indexed=len(prepared),
                replaced=replace,
                fingerprint=fingerprint,
                build_time=time.time() - start_time,
                skipped=skipped,
            )
            self.last_report = report

        for s in skipped:
            logger.warning(f"Skipped entry #{s.position} ({s.term!r}): {s.reason}")
        logger.info(
            f"Built lexicon batch: {report.indexed}/{report.total} indexed, "
            f"{len(skipped)} skipped, replace={replace} in {report.build_time:.3f}s"
        )
        return report

    def insert(self, raw_term: Any, definition: Any, timeout: Any = DEFAULT_TIMEOUT) -> Entry:
        term, raw, definition = prepare_entry((raw_term, definition), self.max_term_length)
        with self.gate.write(timeout):
            entry = self.state.store.insert(term, definition, raw_term=raw)
            self.state.index.add(entry.term, entry.id)
        logger.debug(f"Inserted entry {entry.id} for {entry.term!r}")
        return entry

    def remove(self, entry_id: int, timeout: Any = DEFAULT_TIMEOUT) -> Optional[Entry]:
        """Delete an entry and purge it from the index; None if unknown"""
        with self.gate.write(timeout):
            entry = self.state.store.delete(entry_id)
            if entry is not None:
                self.state.index.remove(entry.term, entry.id)
        if entry is not None:
            logger.debug(f"Removed entry {entry_id} for {entry.term!r}")
        return entry

    def rebuild_index(self, timeout: Any = DEFAULT_TIMEOUT) -> int:
        """Re-derive the inverted index from a full store scan"""
        with self.gate.write(timeout):
            index = InvertedIndex()
            count = 0
            for entry in self.state.store.scan():
                index.add(entry.term, entry.id)
                count += 1
            self.state.index = index
        logger.info(f"Rebuilt inverted index from {count} entries")
        return count

    def _prepare_batch(self, entries: Iterable) -> Tuple[List[PreparedEntry], List[SkippedEntry]]:
        if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Iterable):
            raise InvalidInputError("Entries must be an iterable of (term, definition) items")

        prepared: List[PreparedEntry] = []
        skipped: List[SkippedEntry] = []
        for position, item in enumerate(entries):
            try:
                prepared.append(prepare_entry(item, self.max_term_length))
            except InvalidInputError as e:
                skipped.append(SkippedEntry(position, _raw_term_of(item), str(e)))
        return prepared, skipped


def _apply(prepared: List[PreparedEntry], store: EntryStore, index: InvertedIndex) -> None:
    for term, raw_term, definition in prepared:
        entry = store.insert(term, definition, raw_term=raw_term)
        index.add(entry.term, entry.id)


def _raw_term_of(item: Any) -> Optional[str]:
    if isinstance(item, Mapping):
        value = item.get("term", item.get("word"))
    elif isinstance(item, (tuple, list)) and item:
        value = item[0]
    else:
        value = None
    return value if isinstance(value, str) else None
