from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib.artifacts import resolve
from ..lib.hwdetect import machine_name
from ..lib.node import node_major
from ..models import InstallRun

logger = logging.getLogger(__name__)


class ResolveCompositorStep:
    step_id = "30_resolve_compositor"

    def run(self, ctx: InstallCtx, run: InstallRun) -> None:
        machine = machine_name()
        major = node_major(ctx.cfg.node_bin)
        source = resolve(ctx, run, machine=machine, runtime_major=major)
        logger.info("Compositor installed from %s (machine=%s node=%s)", source.value, machine, major)
