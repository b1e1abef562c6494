"""Exclusive lock file guarding one read-modify-write cycle."""
import fcntl
import os
import time
from typing import Optional

from bind_manager.core.constants import LOCK_POLL_INTERVAL, LOCK_TIMEOUT
from bind_manager.core.exceptions import LockError
from bind_manager.core.logger import logger
from bind_manager.utils.process_utils import ProcessUtils


class FileLock:
    """Advisory ``flock`` on a persistent lock file.

    The kernel drops the lock when the holding process exits, so a crashed
    run never leaves a lock behind. The file is never deleted; it only
    carries the holder's PID for error messages.
    """

    def __init__(self, path: str, timeout: float = LOCK_TIMEOUT, poll_interval: float = LOCK_POLL_INTERVAL):
        self.path = path
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._fd: Optional[int] = None

    @property
    def held(self) -> bool:
        return self._fd is not None

    def _describe_owner(self) -> str:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                owner = int(f.read().strip())
        except (OSError, ValueError):
            return "unknown process"
        if ProcessUtils.is_running(owner):
            return f"pid {owner}"
        return "unknown process"

    def acquire(self) -> None:
        """Acquire the lock, waiting up to ``timeout`` seconds.

        Raises:
            LockError: Another process holds the lock.
        """
        if self.held:
            return
        fd = os.open(self.path, os.O_CREAT | os.O_RDWR, 0o644)
        deadline = time.monotonic() + self.timeout
        while True:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if time.monotonic() >= deadline:
                    os.close(fd)
                    raise LockError(f"Another bind-manager run holds {self.path} ({self._describe_owner()})")
                time.sleep(self.poll_interval)

        os.ftruncate(fd, 0)
        os.write(fd, str(os.getpid()).encode("ascii"))
        self._fd = fd
        logger.debug(f"Acquired lock {self.path}")

    def release(self) -> None:
        if self._fd is None:
            return
        try:
            os.ftruncate(self._fd, 0)
            fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None
        logger.debug(f"Released lock {self.path}")

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False
