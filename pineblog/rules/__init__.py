from .loader import default_rules_path, load_rules
from .models import BlogRules, FilesRules, PostsRules

__all__ = [
    "BlogRules",
    "FilesRules",
    "PostsRules",
    "default_rules_path",
    "load_rules",
]
