from __future__ import annotations


class StorageServiceError(RuntimeError):
    pass


class StorageNotFoundError(StorageServiceError):
    pass
