"""
Posts component port definitions.
"""

from pineblog.core.ports.repo import AuthorRepoPort, PostRepoPort, UnitOfWorkPort

__all__ = ["AuthorRepoPort", "PostRepoPort", "UnitOfWorkPort"]
