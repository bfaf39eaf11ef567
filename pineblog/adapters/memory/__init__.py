from .repos import InMemoryAuthorRepo, InMemoryPostRepo, InMemoryUnitOfWork

__all__ = ["InMemoryAuthorRepo", "InMemoryPostRepo", "InMemoryUnitOfWork"]
