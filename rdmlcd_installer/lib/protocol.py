from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .env import INSTALL_END_SENTINEL

logger = logging.getLogger(__name__)


class TerminalSignal:
    """Emits the end-of-install sentinel that the plugin manager waits for."""

    def __init__(self, stream: Optional[TextIO] = None, sentinel: str = INSTALL_END_SENTINEL) -> None:
        self._stream = stream
        self.sentinel = sentinel
        self.emitted = False

    def emit(self) -> None:
        if self.emitted:
            logger.debug("Sentinel already emitted; ignoring")
            return
        self.emitted = True
        for h in logging.getLogger().handlers:
            h.flush()
        stream = self._stream or sys.stdout
        stream.write(self.sentinel + "\n")
        stream.flush()
