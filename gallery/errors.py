from __future__ import annotations


class GalleryError(RuntimeError):
    pass


class StoreError(GalleryError):
    """The persistent store failed to answer a query."""


class StoreUnavailable(StoreError):
    """The store could not be opened or its schema could not be created.

    Raised only during startup; the process must not serve traffic after it.
    """


class StoreWriteFailure(StoreError):
    pass


class NotFound(GalleryError):
    def __init__(self, item_id: str):
        super().__init__(f"gallery item not found: {item_id}")
        self.item_id = item_id


class ValidationFailure(GalleryError):
    pass


class MissingFile(ValidationFailure):
    pass
