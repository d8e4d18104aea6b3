"""Helpers writing a complete HTTP response in one call.

Each helper follows the same linear sequence against a caller-owned
:class:`~respond.writers.ResponseWriter`:

1. set ``Content-Type: <mime>; charset=utf-8``
2. commit the status line
3. encode the payload and write the body

Because the status is committed before the body is encoded, a failing
encode or template leaves the committed status and headers in place. The
helpers raise instead of retrying; callers decide how to log or recover.

Example:
    >>> from respond import ResponseBuffer, json
    >>> buffer = ResponseBuffer()
    >>> json(buffer, 200, {"message": "hello"})
    >>> bytes(buffer.body)
    b'{"message":"hello"}\\n'
"""

from collections.abc import Mapping
from typing import Any

from jinja2 import Template
from loguru import logger

from respond.core.config import get_settings
from respond.core.constants import (
    CHARSET,
    CONTENT_HTML,
    CONTENT_JSON,
    CONTENT_TEXT,
    CONTENT_TYPE,
    CONTENT_XML,
    content_type_value,
)
from respond.core.exceptions import (
    EncodingError,
    ResponseWriteError,
    TemplateExecutionError,
)
from respond.core.types import Body, Payload
from respond.encoders import encode_json, encode_xml
from respond.writers import ResponseWriter


def set_content_type(target: ResponseWriter, mime: str) -> None:
    """Set the Content-Type header with the package charset.

    Must be called before the status is committed.

    Args:
        target: The response writer.
        mime: The bare MIME type.
    """
    target.headers[CONTENT_TYPE] = content_type_value(mime)


def write_status(target: ResponseWriter, status_code: int) -> None:
    """Commit the status line on the response writer.

    Args:
        target: The response writer.
        status_code: The HTTP status code.

    Raises:
        ResponseWriteError: If the writer fails to send the status line.
    """
    try:
        target.write_header(status_code)
    except OSError as e:
        logger.error(
            "Failed to commit response status: {}",
            e,
            status_code=status_code,
        )
        msg = f"failed to commit status {status_code}"
        raise ResponseWriteError(
            msg, context={"status_code": status_code}, cause=e
        ) from e


def _write_body(target: ResponseWriter, body: bytes, mime: str) -> None:
    try:
        target.write(body)
    except OSError as e:
        logger.error(
            "Failed to write response body: {}",
            e,
            content_type=mime,
            body_size=len(body),
        )
        msg = f"failed to write {len(body)} body bytes"
        raise ResponseWriteError(
            msg, context={"content_type": mime}, cause=e
        ) from e


def _start(target: ResponseWriter, status_code: int, mime: str) -> None:
    set_content_type(target, mime)
    write_status(target, status_code)


def _as_bytes(data: Body) -> bytes:
    if isinstance(data, str):
        return data.encode(CHARSET)
    return bytes(data)


def json(target: ResponseWriter, status_code: int, payload: Payload) -> None:
    """Write ``payload`` as JSON, terminated by a single newline.

    Args:
        target: The response writer.
        status_code: The HTTP status code.
        payload: Any JSON-serializable value, including Pydantic models.

    Raises:
        EncodingError: If the payload cannot be represented in JSON.
        ResponseWriteError: If writing to the target fails.
    """
    _start(target, status_code, CONTENT_JSON)
    try:
        body = encode_json(payload, sort_keys=get_settings().json_sort_keys)
    except EncodingError as e:
        logger.warning("JSON encoding failed: {}", e.message, **e.context)
        raise
    _write_body(target, body, CONTENT_JSON)
    logger.debug("Wrote JSON response", status_code=status_code, size=len(body))


def xml(target: ResponseWriter, status_code: int, payload: Payload) -> None:
    """Write ``payload`` as an XML document without trailing newline.

    Args:
        target: The response writer.
        status_code: The HTTP status code.
        payload: A Pydantic model, a dataclass instance or a single-key mapping.

    Raises:
        EncodingError: If the payload cannot be represented in XML.
        ResponseWriteError: If writing to the target fails.
    """
    _start(target, status_code, CONTENT_XML)
    try:
        body = encode_xml(
            payload,
            short_empty_elements=get_settings().xml_short_empty_elements,
        )
    except EncodingError as e:
        logger.warning("XML encoding failed: {}", e.message, **e.context)
        raise
    _write_body(target, body, CONTENT_XML)
    logger.debug("Wrote XML response", status_code=status_code, size=len(body))


def html(target: ResponseWriter, status_code: int, data: Body) -> None:
    """Write ``data`` verbatim as an HTML response.

    Args:
        target: The response writer.
        status_code: The HTTP status code.
        data: The body; a str is encoded as UTF-8.

    Raises:
        ResponseWriteError: If writing to the target fails.
    """
    _start(target, status_code, CONTENT_HTML)
    _write_body(target, _as_bytes(data), CONTENT_HTML)


def text(target: ResponseWriter, status_code: int, data: Body) -> None:
    """Write ``data`` verbatim as a plain text response.

    Args:
        target: The response writer.
        status_code: The HTTP status code.
        data: The body; a str is encoded as UTF-8.

    Raises:
        ResponseWriteError: If writing to the target fails.
    """
    _start(target, status_code, CONTENT_TEXT)
    _write_body(target, _as_bytes(data), CONTENT_TEXT)


def _template_context(data: object) -> dict[str, Any]:
    # Mapping keys become template variables; the value itself is always `data`
    context: dict[str, Any] = dict(data) if isinstance(data, Mapping) else {}
    context.setdefault("data", data)
    return context


def template(
    target: ResponseWriter,
    status_code: int,
    tmpl: Template,
    data: object = None,
) -> None:
    """Render a pre-parsed Jinja2 template, streaming chunks to the target.

    Chunks are written as the template produces them. When rendering fails
    partway, the chunks already written stay in the body.

    Args:
        target: The response writer.
        status_code: The HTTP status code.
        tmpl: The template to execute.
        data: Optional data exposed to the template as ``data``; a mapping's
            keys are also exposed as variables.

    Raises:
        TemplateExecutionError: If the template fails while rendering.
        ResponseWriteError: If writing to the target fails.
    """
    _start(target, status_code, CONTENT_HTML)

    chunks = tmpl.generate(_template_context(data))
    try:
        while True:
            try:
                chunk = next(chunks)
            except StopIteration:
                break
            except Exception as e:
                logger.warning(
                    "Template execution failed: {}",
                    e,
                    template_name=tmpl.name,
                    status_code=status_code,
                )
                msg = f"template execution failed: {e}"
                raise TemplateExecutionError(
                    msg, template_name=tmpl.name, cause=e
                ) from e
            _write_body(target, chunk.encode(CHARSET), CONTENT_HTML)
    finally:
        chunks.close()
