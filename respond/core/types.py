"""Type aliases for dynamic data flowing through the response helpers.

The payloads accepted by the encoders cannot be statically typed, so these
aliases document intent at the call sites instead.
"""

from collections.abc import MutableMapping
from typing import Any

from starlette.datastructures import MutableHeaders

# Mutable header map exposed by a response writer
# Starlette's MutableHeaders is case-insensitive but not a MutableMapping
type HeaderMap = MutableMapping[str, str] | MutableHeaders

# Any value a caller hands to the JSON or XML encoders
type Payload = Any

# Raw body accepted by the HTML and text helpers
type Body = bytes | bytearray | memoryview | str

# Context dictionary for error details and debugging information
type ErrorContext = dict[str, Any]
