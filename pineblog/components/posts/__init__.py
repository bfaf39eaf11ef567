"""
Posts component - AddPost command, validation and handler.
"""

from .component import add_post_validator, build_post, run_add_post
from .models import AddPostCommand
from .ports import AuthorRepoPort, PostRepoPort, UnitOfWorkPort

__all__ = [
    # Entry points
    "run_add_post",
    # Helpers
    "add_post_validator",
    "build_post",
    # Input models
    "AddPostCommand",
    # Ports
    "AuthorRepoPort",
    "PostRepoPort",
    "UnitOfWorkPort",
]
