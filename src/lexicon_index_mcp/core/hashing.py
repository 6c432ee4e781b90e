"""
Hashing helpers

- get_file_hash: SHA-256 of a file's bytes, hex encoded (stateless tool)
- corpus_fingerprint: xxh3 over (term, definition) pairs, cheap change detection
"""

import hashlib
from pathlib import Path
from typing import Iterable, Tuple, Union

import xxhash

_CHUNK_SIZE = 64 * 1024

# Separators that cannot appear in a normalized term
_FIELD_SEP = b"\x1f"
_RECORD_SEP = b"\x1e"


def get_file_hash(path: Union[str, Path]) -> str:
    """SHA-256 hex digest of the file content"""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(2, "File does not exist", str(file_path))
    if not file_path.is_file():
        raise IsADirectoryError(21, "Not a regular file", str(file_path))

    hasher = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def corpus_fingerprint(pairs: Iterable[Tuple[str, str]]) -> str:
    """Order-sensitive xxh3_64 over normalized (term, definition) pairs"""
    hasher = xxhash.xxh3_64()
    for term, definition in pairs:
        hasher.update(term.encode("utf-8"))
        hasher.update(_FIELD_SEP)
        hasher.update(definition.encode("utf-8"))
        hasher.update(_RECORD_SEP)
    return hasher.hexdigest()
