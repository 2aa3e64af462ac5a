from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib.pkg import provision
from ..models import InstallRun

logger = logging.getLogger(__name__)


class ProvisionDependenciesStep:
    step_id = "20_provision_deps"

    def run(self, ctx: InstallCtx, run: InstallRun) -> None:
        packages = ctx.cfg.system_packages
        logger.info("Installing system dependencies: %s", " ".join(packages))
        provision(packages, dry_run=ctx.dry_run)
