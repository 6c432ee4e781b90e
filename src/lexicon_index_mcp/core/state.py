"""Shared corpus state - the only mutable resource behind the gate."""

from dataclasses import dataclass, field

from .index import InvertedIndex
from .store import EntryStore


@dataclass
class CorpusState:
    store: EntryStore = field(default_factory=EntryStore)
    index: InvertedIndex = field(default_factory=InvertedIndex)
