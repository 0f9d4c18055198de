"""Book lookup service with author restrictions and database error mapping."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from booklog.db import MockDb, NoRowsError
from booklog.multilog import Logger

_MAX_BOOKS = 50544252


class LibraryError(Exception):
    """Base class for errors raised by the library service."""


class EmptyBookNameError(LibraryError):
    def __init__(self, message: str = "book name cannot be empty") -> None:
        super().__init__(message)


class EmptyAuthorError(LibraryError):
    def __init__(self, message: str = "author name cannot be empty") -> None:
        super().__init__(message)


class UnsupportedAuthorError(LibraryError):
    def __init__(self, message: str = "author not supported") -> None:
        super().__init__(message)


class NoBooksError(LibraryError):
    def __init__(self, message: str = "no books match your criteria") -> None:
        super().__init__(message)


class DatabaseError(LibraryError):
    """A lookup failed for a reason other than missing rows."""


@dataclass(frozen=True)
class Book:
    """A book as seen by the service."""

    name: str
    author: str
    published: datetime


class BookGetter(Protocol):
    """A source of books."""

    def get_by_name(self, name: str) -> Book:
        """Return the book with the given title."""

    def get_by_author(self, author_name: str) -> Book:
        """Return a book by the given author."""

    def get_all(self) -> list[Book]:
        """Return every book."""


def _from_row(row) -> Book:
    return Book(name=row.title, author=row.author, published=row.published_on)


class MockAdaptor:
    """Adapts MockDb rows to service books."""

    def __init__(self, db: MockDb) -> None:
        self.db = db

    def get_by_name(self, name: str) -> Book:
        for row in self.db.get_all_books():
            if row.title == name:
                return _from_row(row)
        raise NoBooksError()

    def get_by_author(self, author_name: str) -> Book:
        for row in self.db.get_all_books():
            if row.author == author_name:
                return _from_row(row)
        raise NoBooksError()

    def get_all(self) -> list[Book]:
        return [_from_row(row) for row in self.db.get_all_books()]


class Service:
    """Looks up books, allowing author queries only for supported authors."""

    def __init__(
        self,
        db: BookGetter,
        supported_authors: Iterable[str],
        logger: Logger,
    ) -> None:
        if db is None:
            raise ValueError("db cannot be None")
        authors = frozenset(supported_authors or ())
        if not authors:
            raise ValueError("supported authors cannot be empty")
        if logger is None:
            raise ValueError("logger cannot be None")
        self.db = db
        self.supported_authors = authors
        self.logger = logger

    @staticmethod
    def _translate(err: Exception) -> LibraryError:
        if isinstance(err, NoRowsError):
            return NoBooksError()
        return DatabaseError(f"failed to read from db: {err}")

    def get_book_by_name(self, book_name: str) -> Book:
        if not book_name:
            raise EmptyBookNameError()
        try:
            return self.db.get_by_name(book_name)
        except NoBooksError:
            raise
        except Exception as err:
            raise self._translate(err) from err

    def get_book_by_author(self, author_name: str) -> Book:
        if not author_name:
            raise EmptyAuthorError()
        lowered = author_name.lower()
        self.logger.info("checking for supported author with name", author=lowered)
        if lowered not in self.supported_authors:
            raise UnsupportedAuthorError()
        try:
            return self.db.get_by_author(author_name)
        except NoBooksError:
            raise
        except Exception as err:
            raise self._translate(err) from err

    def get_all_books(self) -> list[Book]:
        try:
            books = list(self.db.get_all())
        except NoBooksError:
            raise
        except Exception as err:
            raise self._translate(err) from err
        if not books or len(books) > _MAX_BOOKS:
            self.logger.error("book length out of bounds", length=len(books))
        return books