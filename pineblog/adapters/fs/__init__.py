from .filestore import LocalFileStore

__all__ = ["LocalFileStore"]
