from __future__ import annotations

import logging

from ..errors import AlreadyInstalling, UnsupportedArchitecture
from .hwdetect import SUPPORTED_ARCHES, detect_arch
from .lock import InstallLock, LockHeldError

logger = logging.getLogger(__name__)


def probe(lock: InstallLock) -> str:
    """Check the host architecture, then take the install lock.

    Nothing is written to disk unless the architecture is supported. A lock
    left by another run is reported, never removed.
    """

    arch = detect_arch()
    if arch not in SUPPORTED_ARCHES:
        raise UnsupportedArchitecture(
            f"This plugin requires ARM architecture (Raspberry Pi). "
            f"Detected architecture: {arch}. Supported architectures: {', '.join(SUPPORTED_ARCHES)}"
        )
    logger.info("Architecture check passed: %s", arch)

    try:
        lock.acquire()
    except LockHeldError as e:
        raise AlreadyInstalling(
            f"Installation already in progress. If you're sure no installation is running, "
            f"remove {lock.path} and try again"
        ) from e

    return arch
