import asyncio
import logging
import os
import threading
from datetime import UTC, datetime
from pathlib import Path

from pineblog.core.entities import FileItem, FileType, PagedFileList, Pager, UploadedFile
from pineblog.core.errors import NotFoundError, PersistenceError
from pineblog.core.result import Failure, Result, Success

logger = logging.getLogger(__name__)


class LocalFileStore:
    """
    File store on the local filesystem.

    Blocking filesystem calls run in a worker thread. Listing is one
    directory deep and ordered by case-folded name, then name.

    A save cancelled before its worker thread starts writing leaves no
    file behind. A write already under way cannot be interrupted and runs
    to completion, although the caller has already seen the cancellation.
    """

    def __init__(self, base_path: str | Path, base_url: str = ""):
        self.base_path = Path(base_path).resolve()
        self.base_url = base_url.rstrip("/")
        if not self.base_path.exists():
            os.makedirs(self.base_path, exist_ok=True)

    def _safe_path(self, *parts: str) -> Path:
        # Prevent traversal
        relative = "/".join(p.strip("/") for p in parts if p and p.strip("/"))
        target = (self.base_path / relative).resolve()
        if target != self.base_path and self.base_path not in target.parents:
            raise PersistenceError(f"Path traversal attempt detected: {relative}")
        return target

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.base_path).as_posix()

    def _url(self, relative: str) -> str:
        return f"{self.base_url}/{relative}" if self.base_url else relative

    # --- save ---

    def _save(
        self, file: UploadedFile, target_path: str, abort: threading.Event | None = None
    ) -> bool:
        target = self._safe_path(target_path, file.file_name)
        if abort is not None and abort.is_set():
            return False
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(file.data)
        return True

    async def save(self, file: UploadedFile, target_path: str) -> Result[None]:
        abort = threading.Event()
        try:
            await asyncio.to_thread(self._save, file, target_path, abort)
        except asyncio.CancelledError:
            abort.set()
            logger.info("Save of %s cancelled", file.file_name)
            raise
        except PersistenceError as exc:
            return Failure(exc)
        except OSError as exc:
            error = PersistenceError(f"Could not save {file.file_name}: {exc}")
            error.__cause__ = exc
            return Failure(error)
        return Success(None)

    # --- delete ---

    def _delete(self, file_name: str, target_path: str) -> bool:
        target = self._safe_path(target_path, file_name)
        if not target.is_file():
            return False
        os.remove(target)
        return True

    async def delete(self, file_name: str, target_path: str) -> Result[None]:
        try:
            deleted = await asyncio.to_thread(self._delete, file_name, target_path)
        except PersistenceError as exc:
            return Failure(exc)
        except OSError as exc:
            error = PersistenceError(f"Could not delete {file_name}: {exc}")
            error.__cause__ = exc
            return Failure(error)
        if not deleted:
            key = "/".join(p.strip("/") for p in (target_path, file_name) if p.strip("/"))
            return Failure(NotFoundError("File", key))
        return Success(None)

    # --- list ---

    def _describe(self, path: Path) -> FileItem:
        stat = path.stat()
        relative = self._relative(path)
        return FileItem(
            name=path.name,
            path=relative,
            url=self._url(relative),
            file_type=FileType.of(path.name),
            size_bytes=stat.st_size,
            modified_at=datetime.fromtimestamp(stat.st_mtime, UTC),
        )

    def _list(
        self,
        page: int,
        page_size: int,
        directory_path: str,
        file_type: FileType,
    ) -> PagedFileList:
        directory = self._safe_path(directory_path)
        if not directory.is_dir():
            files: list[Path] = []
        else:
            files = [
                p for p in directory.iterdir() if p.is_file() and file_type.matches(p.name)
            ]
        files.sort(key=lambda p: (p.name.casefold(), p.name))

        pager = Pager(current_page=page, items_per_page=page_size, total_items=len(files))
        if page < 1:
            return PagedFileList(items=[], pager=pager)
        window = files[pager.offset : pager.offset + page_size]
        return PagedFileList(items=[self._describe(p) for p in window], pager=pager)

    async def list(
        self,
        page: int,
        page_size: int,
        directory_path: str,
        file_type: FileType,
    ) -> Result[PagedFileList]:
        try:
            listing = await asyncio.to_thread(
                self._list, page, page_size, directory_path, file_type
            )
        except PersistenceError as exc:
            return Failure(exc)
        except OSError as exc:
            error = PersistenceError(f"Could not list '{directory_path}': {exc}")
            error.__cause__ = exc
            return Failure(error)
        logger.debug(
            "Listed page %d of '%s' (%d/%d files)",
            page,
            directory_path,
            len(listing.items),
            listing.pager.total_items,
        )
        return Success(listing)
