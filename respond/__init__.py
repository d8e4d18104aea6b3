"""HTTP response helpers for JSON, XML, HTML, plain text and Jinja2 templates.

Each helper sets ``Content-Type`` with a UTF-8 charset, commits the status
code and writes the encoded payload to a caller-owned response writer:

    buffer = ResponseBuffer()
    respond.json(buffer, 200, {"one": "hello", "two": "world"})
    return buffer.to_response()

The package logs through Loguru but stays silent until the application
calls :func:`respond.core.logging.setup_logging`.
"""

from loguru import logger

from respond.core.constants import (
    CHARSET,
    CONTENT_HTML,
    CONTENT_JSON,
    CONTENT_TEXT,
    CONTENT_TYPE,
    CONTENT_XML,
)
from respond.core.exceptions import (
    EncodingError,
    RespondError,
    ResponseWriteError,
    TemplateExecutionError,
)
from respond.responder import (
    html,
    json,
    set_content_type,
    template,
    text,
    write_status,
    xml,
)
from respond.writers import HandlerResponseWriter, ResponseBuffer, ResponseWriter

logger.disable(__name__)

__all__ = [
    "CHARSET",
    "CONTENT_HTML",
    "CONTENT_JSON",
    "CONTENT_TEXT",
    "CONTENT_TYPE",
    "CONTENT_XML",
    "EncodingError",
    "HandlerResponseWriter",
    "RespondError",
    "ResponseBuffer",
    "ResponseWriteError",
    "ResponseWriter",
    "TemplateExecutionError",
    "html",
    "json",
    "set_content_type",
    "template",
    "text",
    "write_status",
    "xml",
]
