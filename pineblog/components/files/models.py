"""
Files component input models and request constructors.

The constructors take the primitive parameters an outer request layer
receives and build the typed command or query.
"""

from __future__ import annotations

from dataclasses import dataclass

from pineblog.core.entities import FileType, UploadedFile

# File lists are always served in pages of nine
FILE_LIST_PAGE_SIZE = 9


@dataclass(frozen=True)
class UploadFileCommand:
    """Store one uploaded file under target_path."""

    file: UploadedFile | None
    target_path: str
    file_type: FileType = FileType.ALL


@dataclass(frozen=True)
class DeleteFileCommand:
    """Delete target_path/file_name from the file store."""

    file_name: str
    target_path: str


@dataclass(frozen=True)
class GetPagedFileListQuery:
    """One page of the files in directory_path matching file_type."""

    page: int = 1
    page_size: int = FILE_LIST_PAGE_SIZE
    directory_path: str = ""
    file_type: FileType = FileType.ALL


# --- Constructors ---


def upload_file_command(
    file: UploadedFile | None,
    target_path: str,
    file_type: FileType | str = FileType.ALL,
) -> UploadFileCommand:
    return UploadFileCommand(
        file=file,
        target_path=target_path or "",
        file_type=FileType.parse(file_type),
    )


def delete_file_command(file_name: str, target_path: str) -> DeleteFileCommand:
    return DeleteFileCommand(file_name=file_name or "", target_path=target_path or "")


def paged_file_list_query(
    page: int = 1,
    directory_path: str = "",
    file_type: FileType | str = FileType.ALL,
) -> GetPagedFileListQuery:
    """Build a file list query; the page size is fixed."""
    return GetPagedFileListQuery(
        page=int(page),
        page_size=FILE_LIST_PAGE_SIZE,
        directory_path=directory_path or "",
        file_type=FileType.parse(file_type),
    )
