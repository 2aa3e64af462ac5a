from __future__ import annotations

import logging

from ..context import InstallCtx
from ..errors import ServiceStartFailed
from ..lib.command import run_cmd
from ..lib.lock import InstallLock
from ..lib.runtime_config import RuntimeConfig
from ..lib.service import activate
from ..models import InstallRun

logger = logging.getLogger(__name__)

BANNER = "=========================================="


class ActivateServiceStep:
    step_id = "50_activate_service"

    def __init__(self, runtime_config: RuntimeConfig, lock: InstallLock) -> None:
        self.runtime_config = runtime_config
        self.lock = lock

    def run(self, ctx: InstallCtx, run: InstallRun) -> None:
        logger.info("Enabling and starting service...")
        try:
            activate(ctx, self.runtime_config)
        except ServiceStartFailed as e:
            logger.warning("Warning: %s", e)
            run.warn(f"{e.kind}: {e}")

        self._finalize(ctx, run)

    def _finalize(self, ctx: InstallCtx, run: InstallRun) -> None:
        self.lock.release()
        run.lock_acquired = False

        # Install runs as root; the plugin itself runs as the volumio user.
        owner = ctx.cfg.owner
        if owner:
            logger.info("Setting correct file ownership...")
            r = run_cmd(["chown", "-R", owner, str(ctx.plugin_dir)], check=False, dry_run=ctx.dry_run)
            if not r.ok:
                logger.warning("Warning: Failed to set ownership, but plugin should still work")
                run.warn(f"chown {owner} failed (exit {r.returncode})")

        unit = f"{ctx.cfg.service_name}.service"
        for line in [
            BANNER,
            "RaspDacMini LCD Plugin Installation Complete",
            BANNER,
            "IMPORTANT: A reboot is required for the device tree overlay to load.",
            f"After reboot, the LCD display should be active at {ctx.cfg.framebuffer}",
            "To verify after reboot:",
            f"  - Check framebuffer: ls -la {ctx.cfg.framebuffer}",
            f"  - Check service: systemctl status {unit}",
            f"  - View logs: journalctl -u {unit} -f",
        ]:
            logger.info(line)
