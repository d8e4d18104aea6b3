"""Shared fixtures for integration tests.

The FastAPI application built here routes every helper and response class
through real HTTP requests, and the stdlib server fixture exercises the
streaming handler adapter over a socket.
"""

import threading
from collections.abc import AsyncGenerator, Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest
from fastapi import FastAPI, Response
from httpx import ASGITransport, AsyncClient
from jinja2 import Environment

import respond
from respond.core.config import get_settings
from respond.responses import JSONResponse, XMLResponse
from tests.support.models import Greeting

PAGE = Environment(autoescape=True).from_string(
    "<ul>{% for item in items %}<li>{{ item }}</li>{% endfor %}</ul>"
)
BROKEN_PAGE = Environment(autoescape=True).from_string(
    "<h1>{{ title }}</h1>{{ title.missing.name }}"
)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Clear the settings cache around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def create_test_app() -> FastAPI:
    """Build an application exposing one route per helper.

    Returns:
        FastAPI: The application under test.
    """
    app = FastAPI(default_response_class=JSONResponse)

    @app.get("/json")
    async def json_route() -> Response:
        buffer = respond.ResponseBuffer()
        respond.json(buffer, 299, {"one": "hello", "two": "world"})
        return buffer.to_response()

    @app.get("/xml")
    async def xml_route() -> Response:
        buffer = respond.ResponseBuffer()
        respond.xml(buffer, 299, Greeting(One="hello", Two="world"))
        return buffer.to_response()

    @app.get("/html")
    async def html_route() -> Response:
        buffer = respond.ResponseBuffer()
        respond.html(buffer, 200, b"Hello <strong>world</strong>!")
        return buffer.to_response()

    @app.get("/text")
    async def text_route() -> Response:
        buffer = respond.ResponseBuffer()
        respond.text(buffer, 200, "Hello world!")
        return buffer.to_response()

    @app.get("/template")
    async def template_route() -> Response:
        buffer = respond.ResponseBuffer()
        respond.template(buffer, 200, PAGE, {"items": ["a", "<b>"]})
        return buffer.to_response()

    @app.get("/template-error")
    async def template_error_route() -> Response:
        buffer = respond.ResponseBuffer()
        try:
            respond.template(buffer, 200, BROKEN_PAGE, {"title": "News"})
        except respond.TemplateExecutionError:
            buffer.headers["X-Template-Error"] = "1"
        return buffer.to_response()

    @app.get("/greeting")
    async def greeting_route() -> Greeting:
        return Greeting(One="hello", Two="world")

    @app.get("/greeting.xml")
    async def greeting_xml_route() -> XMLResponse:
        return XMLResponse(Greeting(One="hello", Two="world"))

    return app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Provide an async HTTP client bound to the test application.

    Yields:
        AsyncClient: Client sending requests through the ASGI transport.
    """
    transport = ASGITransport(app=create_test_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class RespondHandler(BaseHTTPRequestHandler):
    """Request handler writing responses through HandlerResponseWriter."""

    def do_GET(self) -> None:  # noqa: N802 - BaseHTTPRequestHandler API
        """Dispatch on the request path."""
        writer = respond.HandlerResponseWriter(self)
        if self.path == "/json":
            respond.json(writer, 299, {"one": "hello", "two": "world"})
        elif self.path == "/xml":
            respond.xml(writer, 200, Greeting(One="hello", Two="world"))
        elif self.path == "/template":
            respond.template(writer, 200, PAGE, {"items": ["x", "y"]})
        else:
            respond.text(writer, 404, b"not found")

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Silence the default stderr access log."""


@pytest.fixture
def http_server() -> Generator[str]:
    """Run a threaded stdlib HTTP server on an ephemeral port.

    Yields:
        str: The base URL of the running server.
    """
    server = ThreadingHTTPServer(("127.0.0.1", 0), RespondHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def http_client(http_server: str) -> Generator[httpx.Client]:
    """Provide a synchronous client for the stdlib server, ignoring proxies.

    Yields:
        httpx.Client: Client bound to the server base URL.
    """
    with httpx.Client(base_url=http_server, trust_env=False) as client:
        yield client
