"""
Ports for the collaborators the core does not own.

Persistence (authors, posts, unit of work) and physical file storage are
provided by the outer application; the core depends only on these
Protocols.
"""

from .filestore import FileStorePort
from .repo import AuthorRepoPort, PostRepoPort, UnitOfWorkPort

__all__ = [
    "AuthorRepoPort",
    "FileStorePort",
    "PostRepoPort",
    "UnitOfWorkPort",
]
