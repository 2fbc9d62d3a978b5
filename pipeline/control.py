import os
import fcntl
import json
import time
import logging
import contextlib
from typing import Optional, Dict

logger = logging.getLogger(__name__)

LOCK_FILE_PATH = os.environ.get("MATCH_JOB_LOCK_FILE", "match_job.lock")


class PipelineLockedError(RuntimeError):
    """Raised when another population run holds the lock."""

    def __init__(self, owner: Optional[Dict] = None):
        source = (owner or {}).get("source", "unknown")
        super().__init__(f"A population match run is already in progress (source: {source})")
        self.owner = owner


class PipelineController:
    """
    Exclusive lock for population runs, shared by the scheduler ('scheduler')
    and manual triggers ('api', 'cli') in one deployment.

    The upsert is safe under concurrent runs; the lock only avoids doing
    the O(n^2) work twice at the same time.
    """
    def __init__(self, lock_file: Optional[str] = None):
        self.lock_file = lock_file or LOCK_FILE_PATH
        self.file_handle = None

    def _open_file(self):
        if not self.file_handle:
            self.file_handle = open(self.lock_file, "a+")

    def acquire_lock(self, source: str, metadata: Optional[Dict] = None) -> bool:
        """
        Attempt to acquire the lock without blocking.

        Args:
            source: Who is running ('scheduler', 'api', 'cli')
            metadata: Additional info to store (e.g. run id)

        Returns:
            True if lock acquired, False otherwise.
        """
        try:
            self._open_file()
            fcntl.flock(self.file_handle, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            return False

        self.file_handle.truncate(0)
        self.file_handle.seek(0)
        json.dump({
            "source": source,
            "pid": os.getpid(),
            "timestamp": time.time(),
            **(metadata or {})
        }, self.file_handle)
        self.file_handle.flush()
        return True

    def release_lock(self):
        """Release the lock and clear the owner info."""
        if self.file_handle:
            try:
                self.file_handle.truncate(0)
                self.file_handle.seek(0)
                fcntl.flock(self.file_handle, fcntl.LOCK_UN)
            finally:
                self.file_handle.close()
                self.file_handle = None

    def get_lock_info(self) -> Optional[Dict]:
        """
        Read information about the current lock owner.
        Returns None if file doesn't exist or is empty/corrupt.
        """
        if not os.path.exists(self.lock_file):
            return None

        try:
            with open(self.lock_file, "r") as f:
                content = f.read().strip()
                if not content:
                    return None
                return json.loads(content)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read lock info: {e}")
            return None

    @contextlib.contextmanager
    def hold(self, source: str, metadata: Optional[Dict] = None):
        """
        Hold the lock for the duration of the block.

        Raises:
            PipelineLockedError: if another run holds the lock
        """
        if not self.acquire_lock(source, metadata):
            raise PipelineLockedError(self.get_lock_info())
        try:
            yield
        finally:
            self.release_lock()
