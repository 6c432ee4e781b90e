"""
Tool Registry - name -> tool function
"""

from typing import Any, Callable, Dict


def _import_tools():
    """Deferred import to avoid a cycle with mcp_tools"""
    from .mcp_tools import (
        tool_get_dictionary_stats,
        tool_get_file_hash,
        tool_insert_entry,
        tool_load_dictionary,
        tool_rebuild_index,
        tool_remove_entry,
        tool_search_dictionary,
    )

    return {
        "search_dictionary": tool_search_dictionary,
        "load_dictionary": tool_load_dictionary,
        "insert_entry": tool_insert_entry,
        "remove_entry": tool_remove_entry,
        "rebuild_index": tool_rebuild_index,
        "get_dictionary_stats": tool_get_dictionary_stats,
        "get_file_hash": tool_get_file_hash,
    }


def get_tool_registry() -> Dict[str, Callable]:
    """Tool registry - lazily loaded"""
    return _import_tools()


def execute_tool(tool_name: str, **kwargs) -> Dict[str, Any]:
    """
    Unified tool executor - replaces if/else dispatch

    Single entry point, no special cases.
    """
    tools = get_tool_registry()
    tool_func = tools.get(tool_name)

    if not tool_func:
        return {"success": False, "error": f"Unknown tool: {tool_name}", "error_kind": "UnknownTool"}

    return tool_func(**kwargs)
