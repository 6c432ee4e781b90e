"""Entry store - the authoritative (id, term, definition) records."""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .errors import InvalidInputError


@dataclass(frozen=True)
class Entry:
    id: int
    term: str
    definition: str
    raw_term: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "term": self.term,
            "raw_term": self.raw_term or self.term,
            "definition": self.definition,
        }


class EntryScan:
    """Restartable view over the store in insertion order.

    Each ``iter()`` starts a fresh lazy pass; nothing is copied up front.
    """

    def __init__(self, entries: Dict[int, Entry]):
        self._entries = entries

    def __iter__(self) -> Iterator[Entry]:
        for entry in self._entries.values():
            yield entry

    def __len__(self) -> int:
        return len(self._entries)


class EntryStore:
    """Append-only id allocation, dict-backed lookup.

    Not thread-safe: callers go through the ConcurrencyGate.
    """

    def __init__(self, start_id: int = 1):
        if start_id < 1:
            raise ValueError("start_id must be positive")
        self._entries: Dict[int, Entry] = {}
        self._next_id = start_id

    @property
    def next_id(self) -> int:
        return self._next_id

    def insert(self, term: str, definition: str, raw_term: Optional[str] = None) -> Entry:
        """Store a new entry under a freshly allocated id"""
        if not isinstance(term, str) or not term:
            raise InvalidInputError("Term must be a non-empty string")
        if not isinstance(definition, str):
            raise InvalidInputError(f"Definition for {term!r} must be a string")

        entry = Entry(
            id=self._next_id,
            term=term,
            definition=definition,
            raw_term=raw_term if raw_term is not None else term,
        )
        self._entries[entry.id] = entry
        self._next_id += 1
        return entry

    def get(self, entry_id: int) -> Optional[Entry]:
        return self._entries.get(entry_id)

    def delete(self, entry_id: int) -> Optional[Entry]:
        return self._entries.pop(entry_id, None)

    def scan(self) -> EntryScan:
        return EntryScan(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries
