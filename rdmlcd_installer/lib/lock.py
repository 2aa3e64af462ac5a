from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class LockHeldError(RuntimeError):
    """Another install already holds the lock file."""


class InstallLock:
    """File marker giving one installer process exclusive use of the host.

    Acquisition is an atomic create-if-absent. Release only ever removes a file
    this instance created, and at most once.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._held = False
        self._released = False

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self) -> None:
        if self._held:
            raise RuntimeError(f"Lock already acquired by this run: {self.path}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(str(self.path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError as e:
            raise LockHeldError(str(self.path)) from e
        try:
            try:
                os.write(fd, f"{os.getpid()}\n".encode("ascii"))
            finally:
                os.close(fd)
        except OSError:
            # A half-written marker would block every later run.
            self.path.unlink()
            raise
        self._held = True
        logger.debug("Acquired install lock %s", self.path)

    def release(self) -> bool:
        """Remove the lock file if this run holds it. Returns True if removed."""

        if not self._held or self._released:
            return False
        self._released = True
        self._held = False
        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.debug("Install lock %s already gone", self.path)
            return False
        logger.debug("Released install lock %s", self.path)
        return True
