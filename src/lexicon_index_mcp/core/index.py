"""
Inverted index - term -> ordered set of entry ids

Bad programmers worry about the code. Good programmers worry about data structures.
The whole contract is one dict and one normalize(); keep them symmetric.
"""

from typing import Dict, Iterator, List


def normalize(raw_term: str) -> str:
    """Case-fold, trim, collapse internal whitespace.

    Used identically at build time and query time.
    """
    if not isinstance(raw_term, str):
        raise TypeError(f"Term must be a string, got {type(raw_term).__name__}")
    return " ".join(raw_term.split()).casefold()


class InvertedIndex:
    """Exact-match term index.

    Postings are dicts used as ordered sets: insertion order is result order.
    """

    def __init__(self):
        self._postings: Dict[str, Dict[int, None]] = {}

    def add(self, term: str, entry_id: int) -> None:
        # setdefault on the inner dict keeps re-adds idempotent and order-stable
        self._postings.setdefault(term, {})[entry_id] = None

    def remove(self, term: str, entry_id: int) -> None:
        posting = self._postings.get(term)
        if posting is None:
            return
        posting.pop(entry_id, None)
        if not posting:
            del self._postings[term]

    def lookup(self, term: str) -> List[int]:
        posting = self._postings.get(term)
        return list(posting) if posting else []

    def terms(self) -> Iterator[str]:
        return iter(self._postings)

    def posting_count(self) -> int:
        return sum(len(posting) for posting in self._postings.values())

    def clear(self) -> None:
        self._postings.clear()

    def __contains__(self, term: object) -> bool:
        return term in self._postings

    def __len__(self) -> int:
        return len(self._postings)
