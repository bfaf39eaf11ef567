"""
Files component - upload, delete and paged listing of stored files.

Handlers validate nothing themselves (the dispatcher runs the validators
below first) and delegate to the file store, passing its Result through.
A store that raises OSError instead of returning a Failure is reported as
PersistenceError.

Batch uploads are sequential and not transactional: upload_files stops at
the first failing file and keeps the files saved before it.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

from pineblog.core.dispatcher import Dispatcher
from pineblog.core.entities import FileType, PagedFileList, UploadedFile
from pineblog.core.errors import PersistenceError, ValidationFailedError
from pineblog.core.result import Failure, Result, Success
from pineblog.domain.validation import (
    Rule,
    ValidationFailure,
    Validator,
    max_length,
    min_value,
    no_parent_segments,
    not_empty,
    predicate,
)
from pineblog.rules.models import FilesRules

from .models import (
    DeleteFileCommand,
    GetPagedFileListQuery,
    UploadFileCommand,
    upload_file_command,
)
from .ports import FileStorePort

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Longest file name accepted by common filesystems
MAX_FILE_NAME_LENGTH = 255


# --- Validation ---


def _file_name(cmd: UploadFileCommand) -> str | None:
    return cmd.file.file_name if cmd.file is not None else None


def _file_fits_type(cmd: UploadFileCommand) -> bool:
    if cmd.file is None or not cmd.file.file_name:
        return True
    return cmd.file_type.matches(cmd.file.file_name)


def upload_file_validator(rules: FilesRules) -> Validator[UploadFileCommand]:
    limit = rules.max_upload_bytes
    return Validator(
        Rule("file", not_empty("a file is required"), code="required"),
        Rule(
            "file_name",
            predicate(lambda name: name is None or bool(name.strip()), "must not be empty"),
            max_length(MAX_FILE_NAME_LENGTH),
            no_parent_segments(),
            predicate(lambda name: not name or "/" not in name, "must not contain '/'"),
            getter=_file_name,
        ),
        Rule("target_path", not_empty(), no_parent_segments()),
        Rule(
            "file_size",
            predicate(lambda size: size is None or size <= limit, f"must be at most {limit} bytes"),
            getter=lambda cmd: cmd.file.size_bytes if cmd.file is not None else None,
        ),
        Rule(
            "file_type",
            predicate(lambda ok: ok, "file extension does not match the requested file type"),
            getter=_file_fits_type,
        ),
    )


def delete_file_validator() -> Validator[DeleteFileCommand]:
    return Validator(
        Rule("file_name", not_empty(), no_parent_segments()),
        Rule("target_path", not_empty(), no_parent_segments()),
    )


def paged_file_list_validator() -> Validator[GetPagedFileListQuery]:
    # Shape only: an out-of-range page is answered with an empty page
    return Validator(
        Rule("page_size", min_value(1)),
        Rule("directory_path", no_parent_segments()),
    )


# --- Helpers ---


async def _call_store(
    operation: str,
    call: Callable[[], Awaitable[Result[T]]],
) -> Result[T]:
    try:
        result = await call()
    except OSError as exc:
        logger.exception("File store %s raised", operation)
        error = PersistenceError(f"File store {operation} failed: {exc}")
        error.__cause__ = exc
        return Failure(error)
    if isinstance(result, Failure):
        logger.warning("File store %s failed: %s", operation, result.exception)
    return result


# --- Component Entry Points ---


async def run_upload_file(cmd: UploadFileCommand, *, file_store: FileStorePort) -> Result[None]:
    """Save the uploaded file into target_path."""
    file = cmd.file
    if file is None:
        return Failure(
            ValidationFailedError([ValidationFailure("file", "a file is required", "required")])
        )
    result = await _call_store("save", lambda: file_store.save(file, cmd.target_path))
    if result.is_success:
        logger.info("Uploaded %s to '%s'", file.file_name, cmd.target_path)
    return result


async def run_delete_file(cmd: DeleteFileCommand, *, file_store: FileStorePort) -> Result[None]:
    """Delete target_path/file_name."""
    result = await _call_store(
        "delete", lambda: file_store.delete(cmd.file_name, cmd.target_path)
    )
    if result.is_success:
        logger.info("Deleted %s from '%s'", cmd.file_name, cmd.target_path)
    return result


async def run_get_paged_file_list(
    query: GetPagedFileListQuery,
    *,
    file_store: FileStorePort,
) -> Result[PagedFileList]:
    """Return one page of files; pages out of range come back empty."""
    return await _call_store(
        "list",
        lambda: file_store.list(
            query.page, query.page_size, query.directory_path, query.file_type
        ),
    )


async def upload_files(
    dispatcher: Dispatcher,
    files: Iterable[UploadedFile],
    target_path: str,
    file_type: FileType | str = FileType.ALL,
    **send_kwargs: Any,
) -> Result[int]:
    """
    Upload files one at a time through the dispatcher.

    Stops at the first Failure and returns it; earlier files stay saved.
    Returns Success(number of files uploaded) otherwise.
    """
    count = 0
    for file in files:
        result = await dispatcher.send(
            upload_file_command(file, target_path, file_type), **send_kwargs
        )
        if isinstance(result, Failure):
            return result
        count += 1
    return Success(count)
