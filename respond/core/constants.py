"""Core constants for response headers and content types."""

from typing import Final

# Character set appended to every Content-Type header
CHARSET: Final[str] = "utf-8"

# Header names
CONTENT_TYPE: Final[str] = "Content-Type"

# MIME types
CONTENT_JSON: Final[str] = "application/json"
CONTENT_XML: Final[str] = "application/xml"
CONTENT_HTML: Final[str] = "text/html"
CONTENT_TEXT: Final[str] = "text/plain"

# Status committed implicitly when the body is written first
DEFAULT_STATUS_CODE: Final[int] = 200


def content_type_value(mime: str) -> str:
    """Build the Content-Type header value for a MIME type.

    Args:
        mime: The bare MIME type, e.g. ``application/json``.

    Returns:
        str: The header value including the charset parameter.
    """
    return f"{mime}; charset={CHARSET}"
