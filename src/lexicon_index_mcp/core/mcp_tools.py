"""
MCP Tools - lexicon operations as request/response dicts

Direct data operations, no wrappers beyond the error decorator.
"""

from typing import Any, Dict, List, Optional

from .dataset import load_entries
from .decorators import handle_mcp_errors
from .errors import InvalidInputError
from .hashing import get_file_hash
from .lexicon import get_lexicon

# Backwards compatible export
from .tool_registry import execute_tool

__all__ = ["execute_tool"]


# ----- Dictionary tools -----


@handle_mcp_errors
def tool_search_dictionary(word: str) -> Dict[str, Any]:
    """Exact-word lookup; no match is an empty list, not an error"""
    definitions = get_lexicon().search(word)
    return {
        "success": True,
        "word": word,
        "definitions": definitions,
        "count": len(definitions),
    }


@handle_mcp_errors
def tool_load_dictionary(
    entries: Optional[List[Any]] = None,
    path: Optional[str] = None,
    replace: bool = True,
) -> Dict[str, Any]:
    """Bulk load from inline entries or a JSON file"""
    if entries is None and path is None:
        raise InvalidInputError("Provide either entries or path")
    if entries is not None and path is not None:
        raise InvalidInputError("Provide entries or path, not both")
    if path is not None and not isinstance(path, str):
        raise InvalidInputError("path must be a string")

    if path is not None:
        entries = load_entries(path)
    report = get_lexicon().load(entries, replace=replace)
    return {"success": True, **report.to_dict()}


@handle_mcp_errors
def tool_insert_entry(term: str, definition: str) -> Dict[str, Any]:
    entry = get_lexicon().insert(term, definition)
    return {"success": True, "entry": entry.to_dict()}


@handle_mcp_errors
def tool_remove_entry(entry_id: int) -> Dict[str, Any]:
    entry = get_lexicon().remove(entry_id)
    return {
        "success": True,
        "removed": entry is not None,
        "entry": entry.to_dict() if entry else None,
    }


@handle_mcp_errors
def tool_rebuild_index() -> Dict[str, Any]:
    return {"success": True, "entries_indexed": get_lexicon().rebuild_index()}


@handle_mcp_errors
def tool_get_dictionary_stats() -> Dict[str, Any]:
    return {"success": True, **get_lexicon().get_stats()}


# ----- Stateless utilities -----


@handle_mcp_errors
def tool_get_file_hash(path: str) -> Dict[str, Any]:
    """SHA-256 of a file's bytes; independent of the lexicon"""
    if not isinstance(path, str):
        raise InvalidInputError("path must be a string")
    return {"success": True, "path": path, "sha256": get_file_hash(path)}
