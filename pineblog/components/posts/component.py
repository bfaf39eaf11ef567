"""
Posts component - creating blog posts.

AddPost pipeline (after validation by the dispatcher):
1. Look up the author by user name; a missing author is NotFound.
2. Build the post: slug from the title, file base URLs in cover_url and
   content replaced by the configured placeholder.
3. Disambiguate the slug against existing posts (title, title-2, ...).
4. Stage the post and save changes; a failed save is returned as the
   Failure, never raised.

Nothing is staged if a step before persistence fails.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from pineblog.core.entities import Author, Post
from pineblog.core.errors import NotFoundError, PersistenceError
from pineblog.core.result import Failure, Result, Success
from pineblog.domain.content import rewrite_urls, slugify
from pineblog.domain.validation import Rule, Validator, max_length, not_empty
from pineblog.rules.models import FilesRules, PostsRules

from .models import AddPostCommand
from .ports import AuthorRepoPort, PostRepoPort, UnitOfWorkPort

logger = logging.getLogger(__name__)

# Upper bound on slug suffixes tried before giving up
MAX_SLUG_SUFFIX = 1000


# --- Validation ---


def add_post_validator(rules: PostsRules | None = None) -> Validator[AddPostCommand]:
    rules = rules or PostsRules()
    return Validator(
        Rule("user_name", not_empty(), code="required"),
        Rule("title", not_empty(), code="required"),
        Rule("title", max_length(rules.title_max)),
        Rule("content", not_empty(), code="required"),
        Rule("description", not_empty(), code="required"),
        Rule("description", max_length(rules.description_max)),
        Rule("categories", max_length(rules.categories_max)),
        Rule("cover_url", max_length(rules.cover_url_max)),
        Rule("cover_caption", max_length(rules.cover_caption_max)),
        Rule("cover_link", max_length(rules.cover_link_max)),
    )


# --- Helpers ---


def build_post(cmd: AddPostCommand, author: Author, files: FilesRules) -> Post:
    """Map a command onto a new Post with derived slug and rewritten URLs."""
    now = datetime.now(UTC)
    return Post(
        author_id=author.id,
        title=cmd.title,
        slug=slugify(cmd.title),
        description=cmd.description,
        content=rewrite_urls(cmd.content, files.base_url, files.url_placeholder) or "",
        categories=cmd.categories,
        cover_url=rewrite_urls(cmd.cover_url, files.base_url, files.url_placeholder),
        cover_caption=cmd.cover_caption,
        cover_link=cmd.cover_link,
        published=cmd.published,
        created_at=now,
        modified_at=now,
    )


async def _free_slug(slug: str, post_repo: PostRepoPort) -> str | None:
    candidate = slug
    for n in range(2, MAX_SLUG_SUFFIX + 2):
        if await post_repo.find_one(lambda p, s=candidate: p.slug == s) is None:
            return candidate
        candidate = f"{slug}-{n}"
    return None


# --- Component Entry Points ---


async def run_add_post(
    cmd: AddPostCommand,
    *,
    author_repo: AuthorRepoPort,
    post_repo: PostRepoPort,
    unit_of_work: UnitOfWorkPort,
    files: FilesRules,
) -> Result[Post]:
    """
    Create a post.

    Returns:
        Success(post) once saved; Failure(NotFoundError) for an unknown
        author; the save_changes Failure when persisting fails.
    """
    author = await author_repo.find_one(lambda a: a.user_name == cmd.user_name)
    if author is None:
        logger.warning("AddPost: author '%s' not found", cmd.user_name)
        return Failure(NotFoundError("Author", cmd.user_name))

    post = build_post(cmd, author, files)
    slug = await _free_slug(post.slug, post_repo)
    if slug is None:
        return Failure(PersistenceError(f"No free slug for '{post.slug}'"))
    post.slug = slug

    await post_repo.add(post)
    try:
        saved = await unit_of_work.save_changes()
    except Exception as exc:
        logger.exception("AddPost: save_changes raised for '%s'", post.slug)
        error = PersistenceError(f"Saving post '{post.slug}' failed: {exc}")
        error.__cause__ = exc
        return Failure(error)

    if isinstance(saved, Failure):
        logger.warning("AddPost: save failed for '%s': %s", post.slug, saved.exception)
        return Failure(saved.exception)

    logger.info("Post created: %s (%s)", post.slug, post.id)
    return Success(post)
