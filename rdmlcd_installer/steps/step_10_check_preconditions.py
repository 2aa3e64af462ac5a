from __future__ import annotations

import logging

from ..context import InstallCtx
from ..errors import UnsupportedArchitecture
from ..lib.lock import InstallLock
from ..lib.preconditions import probe
from ..models import ArchSupport, InstallRun

logger = logging.getLogger(__name__)


class CheckPreconditionsStep:
    step_id = "10_check_preconditions"

    def __init__(self, lock: InstallLock) -> None:
        self.lock = lock

    def run(self, ctx: InstallCtx, run: InstallRun) -> None:
        try:
            arch = probe(self.lock)
        except UnsupportedArchitecture:
            run.arch_support = ArchSupport.UNSUPPORTED
            raise

        run.arch = arch
        run.arch_support = ArchSupport.SUPPORTED
        run.lock_acquired = self.lock.held
