from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from pineblog.core.entities import Author, Post
from pineblog.core.result import Result


class AuthorRepoPort(Protocol):
    async def find_one(self, predicate: Callable[[Author], bool]) -> Author | None:
        """Return the single author matching predicate, or None."""
        ...


class PostRepoPort(Protocol):
    async def find_one(self, predicate: Callable[[Post], bool]) -> Post | None:
        """Return the single post matching predicate, or None."""
        ...

    async def add(self, post: Post) -> None:
        """Stage a new post; nothing is written until save_changes."""
        ...


class UnitOfWorkPort(Protocol):
    async def save_changes(self) -> Result[int]:
        """
        Atomically write every staged change.

        Returns the number of written rows, or a Failure carrying the
        storage error (e.g. a constraint violation).
        """
        ...
