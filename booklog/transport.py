"""HTTP layer: JSON book responses, request IDs and a small WSGI router."""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any
from urllib.parse import parse_qs

from booklog.library import (
    Book,
    EmptyAuthorError,
    EmptyBookNameError,
    NoBooksError,
    Service,
    UnsupportedAuthorError,
)
from booklog.multilog import Logger

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _marshal(value: Any) -> bytes:
    """Encode compact JSON with HTML-sensitive characters escaped."""
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _JSON_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def _caused_by(err: BaseException, kind: type[BaseException]) -> bool:
    """Tell whether ``err`` or anything in its cause chain is a ``kind``."""
    current: BaseException | None = err
    while current is not None:
        if isinstance(current, kind):
            return True
        current = current.__cause__
    return False


@dataclass(frozen=True)
class BookResponse:
    """The JSON shape of a book returned to clients."""

    title: str
    author: str
    published_on: str
    id: str = ""
    description: str = ""
    genre: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the wire representation; empty description and genre are omitted."""
        data = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
        }
        if self.description:
            data["description"] = self.description
        data["published_on"] = self.published_on
        if self.genre:
            data["genre"] = self.genre
        return data


def new_book_response(book: Book) -> BookResponse:
    """Build the response for a service book."""
    return BookResponse(
        title=book.name,
        author=book.author,
        published_on=book.published.strftime("%Y-%m-%d"),
    )


@dataclass
class Response:
    """A complete HTTP response."""

    status: int
    body: bytes = b""
    headers: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def json(cls, payload: Any) -> Response:
        return cls(
            HTTPStatus.OK,
            _marshal(payload),
            [("Content-Type", "application/json")],
        )

    @classmethod
    def error(cls, status: int, message: str) -> Response:
        return cls(
            status,
            (message + "\n").encode("utf-8"),
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("X-Content-Type-Options", "nosniff"),
            ],
        )


class Handler:
    """Turns service calls into HTTP responses, logging every failure."""

    def __init__(self, service: Service, logger: Logger) -> None:
        self.service = service
        self.logger = logger

    def get_all_books(self, request_id: str) -> Response:
        """Answer a request for every book."""
        try:
            books = self.service.get_all_books()
        except Exception as err:
            if _caused_by(err, EmptyBookNameError):
                self.logger.info("empty_book_passed", request_id=request_id)
                return Response.error(HTTPStatus.BAD_REQUEST, "Book name is required")
            if _caused_by(err, NoBooksError):
                self.logger.info("no_books_found", request_id=request_id)
                return Response.error(HTTPStatus.NOT_FOUND, "No book found with given name")
            self.logger.error("internal_server_error", err=str(err), request_id=request_id)
            return Response.error(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")
        return Response.json([new_book_response(book).to_dict() for book in books])

    def get_book_by_author(self, request_id: str, author: str) -> Response:
        """Answer a request for a book by the given author."""
        self.logger.info("received author", author=author)
        try:
            book = self.service.get_book_by_author(author)
        except Exception as err:
            if _caused_by(err, EmptyAuthorError):
                self.logger.info("empty_author_passed", request_id=request_id)
                return Response.error(HTTPStatus.BAD_REQUEST, "Author is required")
            if _caused_by(err, UnsupportedAuthorError):
                self.logger.info("unsupported_author_passed", request_id=request_id)
                return Response.error(HTTPStatus.BAD_REQUEST, "Unsupported author")
            if _caused_by(err, NoBooksError):
                self.logger.info("no_books_found", request_id=request_id)
                return Response.error(HTTPStatus.NOT_FOUND, "No book found with given author")
            self.logger.error("internal_server_error", err=str(err), request_id=request_id)
            return Response.error(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")
        return Response.json(new_book_response(book).to_dict())


class App:
    """WSGI application routing ``GET /books`` and ``GET /book``."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self._routes: dict[str, Callable[[str, dict[str, list[str]]], Response]] = {
            "/books": lambda request_id, query: self.handler.get_all_books(request_id),
            "/book": lambda request_id, query: self.handler.get_book_by_author(
                request_id, query.get("author", [""])[0]
            ),
        }

    def _dispatch(self, environ: dict[str, Any]) -> Response:
        route = self._routes.get(environ.get("PATH_INFO", "") or "/")
        if route is None:
            return Response.error(HTTPStatus.NOT_FOUND, "404 page not found")
        if environ.get("REQUEST_METHOD", "GET").upper() != "GET":
            return Response(HTTPStatus.METHOD_NOT_ALLOWED)
        request_id = str(uuid.uuid4())
        query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        response = route(request_id, query)
        response.headers.append(("X-Request-ID", request_id))
        return response

    def __call__(
        self,
        environ: dict[str, Any],
        start_response: Callable[..., Any],
    ) -> Iterable[bytes]:
        response = self._dispatch(environ)
        status = HTTPStatus(response.status)
        headers = [*response.headers, ("Content-Length", str(len(response.body)))]
        start_response(f"{status.value} {status.phrase}", headers)
        return [response.body]


def make_app(handler: Handler) -> App:
    """Build the WSGI application for ``handler``."""
    return App(handler)