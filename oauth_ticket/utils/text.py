"""Text helpers for diagnostics."""

MAX_DIAGNOSTIC_LENGTH = 1024


def truncate(text: str, limit: int = MAX_DIAGNOSTIC_LENGTH) -> str:
    """Truncate text for diagnostics.

    Args:
        text: Raw text, e.g. a response body
        limit: Maximum number of characters kept (default: 1024)

    Returns:
        The text itself when short enough, otherwise its first ``limit``
        characters followed by a marker with the number of dropped characters
    """
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... [{len(text) - limit} more characters]"
