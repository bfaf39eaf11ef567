"""
Wiring: build a Dispatcher with every command and query handler registered.

This is a plain constructor; the outer application supplies the
repositories, unit of work and file store.
"""

from __future__ import annotations

from functools import partial

from pineblog.components.files import (
    DeleteFileCommand,
    GetPagedFileListQuery,
    UploadFileCommand,
    delete_file_validator,
    paged_file_list_validator,
    run_delete_file,
    run_get_paged_file_list,
    run_upload_file,
    upload_file_validator,
)
from pineblog.components.posts import AddPostCommand, add_post_validator, run_add_post
from pineblog.core.dispatcher import Dispatcher
from pineblog.core.ports import AuthorRepoPort, FileStorePort, PostRepoPort, UnitOfWorkPort
from pineblog.rules.models import BlogRules


def create_dispatcher(
    rules: BlogRules,
    *,
    author_repo: AuthorRepoPort,
    post_repo: PostRepoPort,
    unit_of_work: UnitOfWorkPort,
    file_store: FileStorePort,
) -> Dispatcher:
    dispatcher = Dispatcher()

    dispatcher.register(
        AddPostCommand,
        partial(
            run_add_post,
            author_repo=author_repo,
            post_repo=post_repo,
            unit_of_work=unit_of_work,
            files=rules.files,
        ),
        add_post_validator(rules.posts),
    )
    dispatcher.register(
        UploadFileCommand,
        partial(run_upload_file, file_store=file_store),
        upload_file_validator(rules.files),
    )
    dispatcher.register(
        DeleteFileCommand,
        partial(run_delete_file, file_store=file_store),
        delete_file_validator(),
    )
    dispatcher.register(
        GetPagedFileListQuery,
        partial(run_get_paged_file_list, file_store=file_store),
        paged_file_list_validator(),
    )
    return dispatcher
