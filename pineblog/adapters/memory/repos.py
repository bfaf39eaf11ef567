"""
In-memory persistence for authors and posts.

Posts added through InMemoryPostRepo are staged until the unit of work
saves them. save_changes writes all staged posts or none: a duplicate id
or slug fails the whole batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from uuid import UUID

from pineblog.core.entities import Author, Post
from pineblog.core.errors import PersistenceError
from pineblog.core.result import Failure, Result, Success

logger = logging.getLogger(__name__)


class InMemoryAuthorRepo:
    def __init__(self, authors: Iterable[Author] = ()) -> None:
        self._authors: dict[UUID, Author] = {a.id: a for a in authors}

    def add(self, author: Author) -> None:
        self._authors[author.id] = author

    async def find_one(self, predicate: Callable[[Author], bool]) -> Author | None:
        return next((a for a in self._authors.values() if predicate(a)), None)


class InMemoryPostRepo:
    def __init__(self) -> None:
        self._posts: dict[UUID, Post] = {}
        self._staged: list[Post] = []

    @property
    def posts(self) -> list[Post]:
        """Committed posts in insertion order."""
        return list(self._posts.values())

    async def find_one(self, predicate: Callable[[Post], bool]) -> Post | None:
        return next((p for p in self._posts.values() if predicate(p)), None)

    async def add(self, post: Post) -> None:
        self._staged.append(post)

    def commit_staged(self) -> Result[int]:
        staged, self._staged = self._staged, []
        ids = set(self._posts)
        slugs = {p.slug for p in self._posts.values()}
        for post in staged:
            if post.id in ids:
                return Failure(PersistenceError(f"Duplicate post id: {post.id}"))
            if post.slug in slugs:
                return Failure(PersistenceError(f"Duplicate post slug: {post.slug}"))
            ids.add(post.id)
            slugs.add(post.slug)
        for post in staged:
            self._posts[post.id] = post
        return Success(len(staged))


class InMemoryUnitOfWork:
    """Commits the staged changes of the repositories it was given."""

    def __init__(self, post_repo: InMemoryPostRepo) -> None:
        self.post_repo = post_repo

    async def save_changes(self) -> Result[int]:
        result = self.post_repo.commit_staged()
        if isinstance(result, Failure):
            logger.warning("save_changes rejected: %s", result.exception)
        return result
