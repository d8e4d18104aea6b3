"""FastAPI response classes rendering through the package encoders.

These classes give FastAPI routes the same bodies and ``Content-Type``
headers the helper functions write, so they can be used as a route's
``response_class`` or as an application's ``default_response_class``:

    app = FastAPI(default_response_class=JSONResponse)

FastAPI converts models returned from a route to plain data before handing
them to a ``response_class``, which loses the root element name XML needs;
return ``XMLResponse(model)`` from the route instead.

That conversion also dumps models by alias, so a model returned from a route
renders with its aliases as keys. A model passed to ``JSONResponse(model)``
directly, or to the ``json`` helper, renders with its field names.

Both classes raise :class:`~respond.core.exceptions.EncodingError` when the
content cannot be serialized.
"""

from typing import Any

from fastapi.responses import Response

from respond.core.config import get_settings
from respond.core.constants import CONTENT_JSON, CONTENT_XML, content_type_value
from respond.encoders import encode_json, encode_xml


class JSONResponse(Response):
    """FastAPI Response class rendering JSON with orjson.

    The body is terminated by a newline, matching the ``json`` helper.

    Attributes:
        media_type: The media type for the response, including the charset.
    """

    media_type = content_type_value(CONTENT_JSON)

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        return encode_json(content, sort_keys=get_settings().json_sort_keys)


class XMLResponse(Response):
    """FastAPI Response class rendering Pydantic models and dataclasses as XML.

    Attributes:
        media_type: The media type for the response, including the charset.
    """

    media_type = content_type_value(CONTENT_XML)

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts models, dataclasses and mappings
        """Render the content as an XML document.

        Args:
            content: The content to serialize to XML.

        Returns:
            bytes: The XML-encoded bytes.
        """
        return encode_xml(
            content,
            short_empty_elements=get_settings().xml_short_empty_elements,
        )
