from __future__ import annotations

import logging
from typing import NoReturn, Optional

from .lib.lock import InstallLock
from .lib.protocol import TerminalSignal
from .models import InstallRun, Outcome

logger = logging.getLogger(__name__)


def _kind(error: BaseException) -> str:
    return getattr(error, "kind", type(error).__name__)


def _report(error: BaseException, step_id: Optional[str]) -> None:
    logger.error("Step %s failed [%s]: %s", step_id or "-", _kind(error), error)


class RollbackHandler:
    """Ends a failed run: releases the lock, signals the caller, exits non-zero.

    Side effects already applied (packages, overlay, unit files) are left in
    place; a fresh run re-applies them idempotently.
    """

    def __init__(self, *, lock: InstallLock, signal: TerminalSignal) -> None:
        self.lock = lock
        self.signal = signal

    def terminate(
        self,
        run: InstallRun,
        error: BaseException,
        *,
        step_id: Optional[str],
        exit_code: int = 1,
    ) -> NoReturn:
        """Stop without cleanup; used when no lock of ours can exist."""

        _report(error, step_id)
        self._finish(run, step_id, exit_code)

    def _finish(self, run: InstallRun, step_id: Optional[str], exit_code: int) -> NoReturn:
        run.failed_step = step_id
        run.outcome = Outcome.FAILED
        self.signal.emit()
        raise SystemExit(exit_code)

    def rollback(
        self,
        run: InstallRun,
        error: BaseException,
        *,
        step_id: Optional[str],
        exit_code: int = 1,
    ) -> NoReturn:
        _report(error, step_id)
        logger.error("Installation failed. Cleaning up...")
        try:
            self.lock.release()
        except OSError as e:
            logger.error("Could not remove install lock %s: %s", self.lock.path, e)
        else:
            run.lock_acquired = False
        self._finish(run, step_id, exit_code)
