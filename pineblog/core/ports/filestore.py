from __future__ import annotations

from typing import Protocol

from pineblog.core.entities import FileType, PagedFileList, UploadedFile
from pineblog.core.result import Result


class FileStorePort(Protocol):
    """
    Physical storage for uploaded files.

    Paths are relative to the store root and use "/" as separator; an empty
    path is the root directory.
    """

    async def save(self, file: UploadedFile, target_path: str) -> Result[None]:
        """Write file into target_path, replacing any file of the same name."""
        ...

    async def delete(self, file_name: str, target_path: str) -> Result[None]:
        """Remove target_path/file_name. Failure(NotFoundError) when missing."""
        ...

    async def list(
        self,
        page: int,
        page_size: int,
        directory_path: str,
        file_type: FileType,
    ) -> Result[PagedFileList]:
        """
        Return one page of the files in directory_path matching file_type.

        Ordering is deterministic so pages are stable for an unchanged
        directory. Pages below 1 or past the end yield empty items.
        """
        ...
