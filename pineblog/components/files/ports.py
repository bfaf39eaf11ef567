"""
Files component port definitions.
"""

from pineblog.core.ports.filestore import FileStorePort

__all__ = ["FileStorePort"]
