"""
Lexicon Index MCP Server

Thin tool registration over execute_tool; the lexicon is built once at
startup and a failure there stops the server.
"""

import logging
import sys
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .config import get_config
from .core.errors import StoreInitFailedError
from .core.lexicon import init_lexicon
from .core.tool_registry import execute_tool

logger = logging.getLogger(__name__)

mcp = FastMCP("LexiconIndex")


@mcp.tool()
def unified_tool(operation: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Unified tool entry - every registered operation by name

    e.g. unified_tool("remove_entry", {"entry_id": 3})
    """
    return execute_tool(operation, **(params or {}))


# ----- Dictionary -----


@mcp.tool()
def search_dictionary(word: str) -> Dict[str, Any]:
    """Look up definitions for an exact word (case and spacing insensitive)"""
    return execute_tool("search_dictionary", word=word)


@mcp.tool()
def load_dictionary(
    entries: Optional[List[Dict[str, str]]] = None,
    path: Optional[str] = None,
    replace: bool = True,
) -> Dict[str, Any]:
    """Load {term, definition} entries inline or from a JSON file; replace or append"""
    return execute_tool("load_dictionary", entries=entries, path=path, replace=replace)


@mcp.tool()
def get_dictionary_stats() -> Dict[str, Any]:
    """Entry, term and gate statistics"""
    return execute_tool("get_dictionary_stats")


# ----- Files -----


@mcp.tool()
def get_file_hash(path: str) -> Dict[str, Any]:
    """SHA-256 hex digest of a file"""
    return execute_tool("get_file_hash", path=path)


def main():
    try:
        config = get_config()
    except ValueError as e:
        logging.basicConfig(level=logging.ERROR, stream=sys.stderr)
        logger.critical(f"Startup aborted, invalid configuration: {e}")
        raise SystemExit(1) from e

    logging.basicConfig(level=config.get_log_level(), stream=sys.stderr)

    try:
        lexicon = init_lexicon(config=config)
    except StoreInitFailedError as e:
        logger.critical(f"Startup aborted: {e}")
        raise SystemExit(1) from e

    logger.info(f"Lexicon ready with {len(lexicon.entries())} entries")
    mcp.run()


if __name__ == "__main__":
    main()
