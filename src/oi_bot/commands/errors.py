"""
Discord Command Error Replies
==============================

Standardized error text for slash commands.  Replies are edited into an
already deferred response, so these are message kwargs rather than full
interaction responses.
"""

from typing import Any, Dict

FETCH_FAILED_MESSAGE = "❌ Failed to fetch open interest data. Please try again later."


def fetch_failed_error() -> Dict[str, Any]:
    """
    Return the reply used when the ``/oi`` command fails unexpectedly.

    Returns
    -------
    Dict[str, Any]
        Keyword arguments for ``edit_original_response``
    """
    return {"content": FETCH_FAILED_MESSAGE, "embed": None}

