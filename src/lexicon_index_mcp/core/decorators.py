"""
Tool error handling - one decorator instead of a try/except per tool

Errors become response dicts but keep their kind: "no results" is a
success with an empty list, a rejected query is QueryRejected, and a
timeout is LockTimeout. Nothing collapses into an opaque string.
"""

import errno
import inspect
import logging
from functools import wraps
from typing import Any, Callable, Dict, cast

from .errors import LexiconError

logger = logging.getLogger(__name__)


def error_response(error: Exception) -> Dict[str, Any]:
    """Specific error response - say what the problem is"""
    if isinstance(error, LexiconError):
        return {"success": False, "error": str(error), "error_kind": error.kind}
    if isinstance(error, FileNotFoundError):
        return {"success": False, "error": "File does not exist", "error_kind": "FileNotFound", "path": error.filename}
    if isinstance(error, PermissionError) or (isinstance(error, OSError) and error.errno == errno.EACCES):
        return {"success": False, "error": f"Permission denied: {error.filename}", "error_kind": "PermissionDenied"}
    if isinstance(error, OSError):
        return {"success": False, "error": f"{error.strerror or error}: {error.filename}", "error_kind": "OSError"}
    return {"success": False, "error": str(error), "error_kind": "InternalError"}


def handle_mcp_errors(func: Callable) -> Callable:
    """
    Tool error handling decorator - standard response shape

    Every response carries ``success``; failures carry ``error_kind``.
    Only a call that does not fit the tool's signature is InvalidInput;
    any other TypeError or ValueError raised inside is an InternalError.
    """
    signature = inspect.signature(func)

    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            signature.bind(*args, **kwargs)
        except TypeError as e:
            logger.debug(f"{func.__name__} called with bad parameters: {e}")
            return {
                "success": False,
                "error": f"Invalid parameters: {e}",
                "error_kind": "InvalidInput",
                "function": func.__name__,
            }

        try:
            result = func(*args, **kwargs)
            if isinstance(result, dict) and "success" not in result:
                result["success"] = True
            return cast(Dict[str, Any], result)
        except (LexiconError, OSError) as e:
            logger.debug(f"{func.__name__} failed: {e}")
            response = error_response(e)
            response["function"] = func.__name__
            return response
        except Exception as e:
            logger.exception(f"Unexpected error in {func.__name__}")
            response = error_response(e)
            response["function"] = func.__name__
            return response

    return wrapper
