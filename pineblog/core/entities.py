"""
Domain entities for pineblog-core.

Author and Post are owned by the persistence layer; the core only reads
authors and creates posts. File descriptors and paging types describe what
the file store returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from math import ceil
from pathlib import PurePosixPath
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- Authors & Posts ---


class Author(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    user_name: str
    display_name: str
    avatar_url: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class Post(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    author_id: UUID
    title: str
    slug: str
    description: str
    content: str
    categories: str | None = None

    cover_url: str | None = None
    cover_caption: str | None = None
    cover_link: str | None = None

    # None means draft
    published: datetime | None = None

    created_at: datetime = Field(default_factory=_utcnow)
    modified_at: datetime = Field(default_factory=_utcnow)


# --- Files ---


class FileType(Enum):
    """
    File type filter.

    ALL matches everything; the other members match on file extension.
    """

    ALL = "all"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"

    @classmethod
    def parse(cls, name: str | FileType) -> FileType:
        """Parse a file type name case-insensitively. Raises ValueError."""
        if isinstance(name, FileType):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown file type '{name}'. Allowed: {allowed}") from None

    @property
    def extensions(self) -> frozenset[str]:
        return FILE_TYPE_EXTENSIONS.get(self, frozenset())

    def matches(self, file_name: str) -> bool:
        if self is FileType.ALL:
            return True
        return PurePosixPath(file_name).suffix.lower() in self.extensions

    @classmethod
    def of(cls, file_name: str) -> FileType:
        """Infer the concrete type of a file, ALL when the extension is unknown."""
        suffix = PurePosixPath(file_name).suffix.lower()
        for file_type, extensions in FILE_TYPE_EXTENSIONS.items():
            if suffix in extensions:
                return file_type
        return cls.ALL


FILE_TYPE_EXTENSIONS: dict[FileType, frozenset[str]] = {
    FileType.IMAGE: frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".bmp", ".ico"}),
    FileType.AUDIO: frozenset({".mp3", ".wav", ".ogg", ".m4a", ".flac"}),
    FileType.VIDEO: frozenset({".mp4", ".webm", ".mov", ".avi", ".mkv"}),
    FileType.DOCUMENT: frozenset(
        {".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".txt", ".md", ".csv"}
    ),
}


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded file, independent of the transport it arrived on."""

    file_name: str
    data: bytes
    content_type: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class FileItem:
    """A file as listed by the file store."""

    name: str
    path: str
    url: str
    file_type: FileType
    size_bytes: int
    modified_at: datetime


@dataclass(frozen=True)
class Pager:
    """Paging metadata; pages are 1-based."""

    current_page: int
    items_per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        if self.items_per_page <= 0:
            return 0
        return ceil(self.total_items / self.items_per_page)

    @property
    def offset(self) -> int:
        return max(self.current_page - 1, 0) * self.items_per_page

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1 and self.total_items > 0

    @property
    def has_next(self) -> bool:
        return 1 <= self.current_page < self.total_pages


@dataclass(frozen=True)
class PagedFileList:
    items: list[FileItem] = field(default_factory=list)
    pager: Pager = field(default_factory=lambda: Pager(1, 9, 0))
