"""
Posts component input models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AddPostCommand:
    """Create a post for the author identified by user_name."""

    user_name: str = ""
    title: str = ""
    content: str = ""
    description: str = ""
    categories: str | None = None
    cover_url: str | None = None
    cover_caption: str | None = None
    cover_link: str | None = None
    published: datetime | None = None
