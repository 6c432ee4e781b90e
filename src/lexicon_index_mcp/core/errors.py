"""
Lexicon error taxonomy

Every failure carries a stable ``kind`` so callers can tell
"no results" from "rejected" from "try again later".
"""


class LexiconError(Exception):
    """Base class for lexicon errors"""

    kind = "LexiconError"


class InvalidInputError(LexiconError):
    """Raised for an empty or malformed term on insert"""

    kind = "InvalidInput"


class QueryRejectedError(LexiconError):
    """Raised for a structurally invalid query string"""

    kind = "QueryRejected"


class LockTimeoutError(LexiconError):
    """Raised when the gate is not granted within the timeout"""

    kind = "LockTimeout"


class StoreInitFailedError(LexiconError):
    """Raised when the backing store cannot be created; fatal at startup"""

    kind = "StoreInitFailed"


class LexiconNotInitializedError(LexiconError):
    """Raised when the global lexicon is used before startup built it"""

    kind = "NotInitialized"
