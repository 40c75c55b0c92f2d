from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait

from .uploads import UPLOAD_URL_PREFIX


def is_stored_upload(src: str | None) -> bool:
    """True for media this service wrote itself (as opposed to external URLs)."""
    return bool(src) and str(src).startswith(UPLOAD_URL_PREFIX + "/")


class FileReclaimer:
    """Removes stored upload files off the request path.

    `reclaim()` only schedules the unlink and returns immediately; failures are
    logged and never reach the caller.
    """

    def __init__(self, upload_dir: str, logger: logging.Logger):
        self.upload_dir = upload_dir
        self.logger = logger
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="file-reclaim")
        self._pending: set[Future] = set()
        self._lock = threading.Lock()

    def path_for(self, src: str) -> str:
        # Only the basename is trusted; `src` never escapes the upload dir.
        return os.path.join(self.upload_dir, os.path.basename(src))

    def reclaim(self, src: str, *, item_id: str | None = None) -> Future | None:
        if not is_stored_upload(src):
            self.logger.debug("Item %s was not an uploaded file; skipping file deletion.", item_id or src)
            return None

        path = self.path_for(src)
        fut = self._executor.submit(self._unlink, path)
        with self._lock:
            self._pending.add(fut)
        fut.add_done_callback(self._forget)
        return fut

    def _forget(self, fut: Future) -> None:
        with self._lock:
            self._pending.discard(fut)

    def _unlink(self, path: str) -> bool:
        try:
            os.remove(path)
        except OSError:
            self.logger.exception("Failed to delete file %s", path)
            return False
        self.logger.info("Successfully deleted file: %s", path)
        return True

    def flush(self, timeout: float | None = None) -> None:
        """Block until every scheduled removal has finished."""
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
