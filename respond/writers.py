"""Response writers the helpers write status, headers and body bytes into.

A writer is anything implementing :class:`ResponseWriter`: a mutable header
map, a way to commit the status line, and a way to append body bytes. Two
implementations ship with the package:

- :class:`ResponseBuffer` collects the response in memory and converts it to
  a FastAPI/Starlette ``Response``
- :class:`HandlerResponseWriter` streams straight to a
  ``http.server.BaseHTTPRequestHandler``

Writers are not safe for concurrent use; callers must not share one between
threads.
"""

from http.server import BaseHTTPRequestHandler
from typing import Protocol, runtime_checkable

from fastapi.responses import Response
from loguru import logger
from starlette.datastructures import MutableHeaders

from respond.core.constants import DEFAULT_STATUS_CODE
from respond.core.types import HeaderMap


@runtime_checkable
class ResponseWriter(Protocol):
    """Protocol for the response target passed to every helper."""

    @property
    def headers(self) -> HeaderMap:
        """Mutable header map, applied when the status is committed."""
        ...

    def write_header(self, status_code: int) -> None:
        """Commit the status line and the current headers."""
        ...

    def write(self, data: bytes) -> int:
        """Write body bytes, committing a 200 status first if needed."""
        ...


class ResponseBuffer:
    """In-memory response writer.

    Headers are snapshotted when the status is committed, so changes made
    afterwards do not affect the recorded response. A second status commit
    is ignored.

    Attributes:
        status_code: The committed status code, or None before commit.
        body: The body bytes written so far.
    """

    def __init__(self) -> None:
        self._headers = MutableHeaders()
        self._committed_headers: MutableHeaders | None = None
        self.status_code: int | None = None
        self.body = bytearray()

    @property
    def headers(self) -> MutableHeaders:
        """Header map that will be committed with the status line."""
        return self._headers

    @property
    def committed(self) -> bool:
        """Whether the status line and headers were committed."""
        return self.status_code is not None

    @property
    def committed_headers(self) -> MutableHeaders:
        """Headers as they were at commit time, or the live map before commit."""
        if self._committed_headers is None:
            return self._headers
        return self._committed_headers

    def write_header(self, status_code: int) -> None:
        """Commit the status line and snapshot the headers.

        Args:
            status_code: The HTTP status code to commit.
        """
        if self.committed:
            logger.warning(
                "Superfluous status commit ignored",
                status_code=status_code,
                committed_status_code=self.status_code,
            )
            return
        self.status_code = status_code
        self._committed_headers = MutableHeaders(raw=list(self._headers.raw))

    def write(self, data: bytes) -> int:
        """Append body bytes, committing a 200 status first if needed.

        Args:
            data: The bytes to append.

        Returns:
            int: The number of bytes written.
        """
        if not self.committed:
            self.write_header(DEFAULT_STATUS_CODE)
        self.body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        """Convert the buffered response into a FastAPI response.

        Returns:
            Response: A response carrying the committed status, headers and body.
        """
        return Response(
            content=bytes(self.body),
            status_code=self.status_code or DEFAULT_STATUS_CODE,
            headers=dict(self.committed_headers.items()),
        )


class HandlerResponseWriter:
    """Response writer streaming to a stdlib ``BaseHTTPRequestHandler``.

    Args:
        handler: The request handler whose connection receives the response.
    """

    def __init__(self, handler: BaseHTTPRequestHandler) -> None:
        self.handler = handler
        self._headers = MutableHeaders()
        self.status_code: int | None = None

    @property
    def headers(self) -> MutableHeaders:
        """Case-insensitive header map sent when the status is committed."""
        return self._headers

    def write_header(self, status_code: int) -> None:
        """Send the status line and headers to the client.

        Args:
            status_code: The HTTP status code to send.
        """
        if self.status_code is not None:
            logger.warning(
                "Superfluous status commit ignored",
                status_code=status_code,
                committed_status_code=self.status_code,
            )
            return
        self.status_code = status_code
        self.handler.send_response(status_code)
        for name, value in self._headers.items():
            self.handler.send_header(name, value)
        self.handler.end_headers()

    def write(self, data: bytes) -> int:
        """Write body bytes to the client connection.

        Args:
            data: The bytes to send.

        Returns:
            int: The number of bytes written.

        Raises:
            OSError: If the connection is broken.
        """
        if self.status_code is None:
            self.write_header(DEFAULT_STATUS_CODE)
        self.handler.wfile.write(data)
        return len(data)
