"""Payload encoders shared by the responder functions and response classes.

JSON encoding uses orjson for fast serialization with native handling of
datetime, UUID, enums and dataclasses. Pydantic models, including nested ones,
are dumped to JSON-compatible data on the way.

XML encoding walks Pydantic models, dataclasses and mappings and builds an
ElementTree document:

- the root element is named after the model or dataclass, or after the only
  key of a single-key mapping
- fields become child elements in declaration order
- lists and tuples repeat the element once per item
- ``None`` values are omitted
- characters XML 1.0 cannot carry are replaced with U+FFFD

Both encoders raise :class:`~respond.core.exceptions.EncodingError` when the
payload cannot be represented.
"""

import dataclasses
import math
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Final
from uuid import UUID

import orjson
from pydantic import BaseModel

from respond.core.constants import CONTENT_JSON, CONTENT_XML
from respond.core.exceptions import EncodingError
from respond.core.types import Payload

# Element names accepted by the XML encoder (no namespaces)
XML_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[^\W\d][\w.\-]*$")

# Characters outside the XML 1.0 Char production, including lone surrogates
XML_INVALID_CHARS: Final[re.Pattern[str]] = re.compile(
    "[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _json_default(obj: Any) -> Any:  # noqa: ANN401 - orjson default hook
    """Convert values orjson does not support natively.

    Decimals are rendered as strings so no precision is lost, the same way
    Pydantic dumps them in JSON mode.

    Args:
        obj: The value orjson could not serialize.

    Returns:
        Any: A JSON-compatible replacement.

    Raises:
        TypeError: If the value has no JSON representation.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, Decimal):
        return str(obj)
    msg = f"Type is not JSON serializable: {type(obj).__name__}"
    raise TypeError(msg)


def _check_finite(value: object) -> None:
    """Reject NaN and infinities, which orjson would write as ``null``.

    Raises:
        ValueError: If a float or Decimal anywhere in the payload is not finite.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"{value!r}"
            raise ValueError(msg)
    elif isinstance(value, Decimal):
        if not value.is_finite():
            msg = f"{value!r}"
            raise ValueError(msg)
    elif isinstance(value, Mapping):
        for item in value.values():
            _check_finite(item)
    elif isinstance(value, list | tuple):
        for item in value:
            _check_finite(item)
    elif _is_composite(value):
        for _, item in _fields(value):
            _check_finite(item)


def encode_json(payload: Payload, *, sort_keys: bool = False) -> bytes:
    """Encode a payload as compact JSON followed by a single newline.

    Non-string mapping keys such as integers are written as strings.

    Args:
        payload: The value to serialize.
        sort_keys: Sort object keys instead of keeping insertion order.

    Returns:
        bytes: The JSON document terminated by ``\\n``.

    Raises:
        EncodingError: If the payload cannot be represented in JSON.
    """
    option = orjson.OPT_APPEND_NEWLINE | orjson.OPT_NON_STR_KEYS
    if sort_keys:
        option |= orjson.OPT_SORT_KEYS

    try:
        _check_finite(payload)
        return orjson.dumps(payload, default=_json_default, option=option)
    except RecursionError as e:
        msg = "json: payload nesting is too deep or cyclic"
        raise EncodingError(
            msg,
            content_type=CONTENT_JSON,
            context={"payload_type": type(payload).__name__},
            cause=e,
        ) from e
    except (TypeError, ValueError) as e:
        msg = f"json: unsupported value: {e}"
        raise EncodingError(
            msg,
            content_type=CONTENT_JSON,
            context={"payload_type": type(payload).__name__},
            cause=e,
        ) from e


def _unsupported(value: object) -> EncodingError:
    return EncodingError(
        f"xml: unsupported type: {type(value).__name__}",
        content_type=CONTENT_XML,
        context={"payload_type": type(value).__name__},
    )


def _is_composite(value: object) -> bool:
    if isinstance(value, BaseModel | Mapping):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _fields(value: object) -> Iterator[tuple[str, Any]]:
    """Yield (element name, value) pairs for a composite value in order."""
    if isinstance(value, BaseModel):
        for name, field in type(value).model_fields.items():
            yield field.alias or name, getattr(value, name)
    elif isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise _unsupported(key)
            yield key, item
    else:
        for field in dataclasses.fields(value):  # type: ignore[arg-type]
            yield field.name, getattr(value, field.name)


def _scalar_text(value: object) -> str:
    """Render a scalar value as element text."""
    if isinstance(value, Enum):
        return _scalar_text(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int | float | Decimal | UUID):
        return str(value)
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    if isinstance(value, bytes | bytearray):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise _unsupported(value) from e
    raise _unsupported(value)


def _element_name(name: str) -> str:
    if not XML_NAME_PATTERN.match(name) or name.lower().startswith("xml"):
        msg = f"xml: invalid element name: {name!r}"
        raise EncodingError(msg, content_type=CONTENT_XML)
    return name


def _fill(element: ET.Element, value: object) -> None:
    if value is None:
        return
    if _is_composite(value):
        for name, child in _fields(value):
            _append(element, name, child)
    else:
        element.text = XML_INVALID_CHARS.sub("\ufffd", _scalar_text(value))


def _append(parent: ET.Element, name: str, value: object) -> None:
    if value is None:
        return
    if isinstance(value, list | tuple):
        for item in value:
            _append(parent, name, item)
        return
    _fill(ET.SubElement(parent, _element_name(name)), value)


def _root(payload: Payload) -> tuple[str, Any]:
    """Pick the root element name and content for a payload."""
    if isinstance(payload, BaseModel) or (
        dataclasses.is_dataclass(payload) and not isinstance(payload, type)
    ):
        return type(payload).__name__, payload
    if isinstance(payload, Mapping) and len(payload) == 1:
        ((name, content),) = payload.items()
        if isinstance(name, str) and not isinstance(content, list | tuple):
            return name, content
    raise _unsupported(payload)


def encode_xml(payload: Payload, *, short_empty_elements: bool = False) -> bytes:
    """Encode a payload as an XML document without declaration.

    Args:
        payload: A Pydantic model, a dataclass instance or a single-key mapping.
        short_empty_elements: Render empty elements as ``<Name />``.

    Returns:
        bytes: The UTF-8 encoded XML document, with no trailing newline.

    Raises:
        EncodingError: If the payload cannot be represented in XML.
    """
    name, content = _root(payload)
    root = ET.Element(_element_name(name))
    try:
        _fill(root, content)
    except RecursionError as e:
        msg = "xml: payload nesting is too deep or cyclic"
        raise EncodingError(msg, content_type=CONTENT_XML, cause=e) from e

    document = ET.tostring(
        root, encoding="unicode", short_empty_elements=short_empty_elements
    )
    return document.encode("utf-8")
