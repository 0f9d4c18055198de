"""An in-memory book store that answers unpredictably, for exercising error paths."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timezone


class NoRowsError(LookupError):
    """Raised when a query matches no rows."""

    def __init__(self, message: str = "sql: no rows in result set") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Book:
    """A book row as stored in the database."""

    id: str
    title: str
    author: str
    description: str
    published_on: datetime
    genre: str


_CATALOGUE = (
    Book(
        id="1",
        title="The Great Adventure",
        author="Jane Doe",
        description="An exciting journey through uncharted territories.",
        published_on=datetime(2020, 1, 10, tzinfo=timezone.utc),
        genre="Adventure",
    ),
    Book(
        id="2",
        title="Mystery of the Lost City",
        author="John Smith",
        description="A thrilling mystery set in a forgotten city.",
        published_on=datetime(2018, 5, 23, tzinfo=timezone.utc),
        genre="Mystery",
    ),
    Book(
        id="3",
        title="Science and You",
        author="Alice Johnson",
        description="Exploring the wonders of science in everyday life.",
        published_on=datetime(2021, 8, 15, tzinfo=timezone.utc),
        genre="Science",
    ),
)


class MockDb:
    """Returns the catalogue, no rows, or an unknown failure at random."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def get_all_books(self) -> list[Book]:
        """Return every book, or raise NoRowsError or RuntimeError."""
        outcome = self._rng.randint(1, 3)
        if outcome == 1:
            return list(_CATALOGUE)
        if outcome == 2:
            raise NoRowsError()
        if outcome == 3:
            raise RuntimeError("some unknown error")
        return []