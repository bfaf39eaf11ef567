"""
Files component - upload, delete and paged listing of stored files.
"""

from .component import (
    MAX_FILE_NAME_LENGTH,
    delete_file_validator,
    paged_file_list_validator,
    run_delete_file,
    run_get_paged_file_list,
    run_upload_file,
    upload_file_validator,
    upload_files,
)
from .models import (
    FILE_LIST_PAGE_SIZE,
    DeleteFileCommand,
    GetPagedFileListQuery,
    UploadFileCommand,
    delete_file_command,
    paged_file_list_query,
    upload_file_command,
)
from .ports import FileStorePort

__all__ = [
    # Entry points
    "run_delete_file",
    "run_get_paged_file_list",
    "run_upload_file",
    "upload_files",
    # Validators
    "delete_file_validator",
    "paged_file_list_validator",
    "upload_file_validator",
    # Configuration
    "FILE_LIST_PAGE_SIZE",
    "MAX_FILE_NAME_LENGTH",
    # Input models and constructors
    "DeleteFileCommand",
    "GetPagedFileListQuery",
    "UploadFileCommand",
    "delete_file_command",
    "paged_file_list_query",
    "upload_file_command",
    # Ports
    "FileStorePort",
]
