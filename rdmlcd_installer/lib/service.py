from __future__ import annotations

import logging

from ..context import InstallCtx
from ..errors import (
    ServiceEnableFailed,
    ServiceStartFailed,
    StrictServiceStartFailed,
    SupervisorReloadFailed,
)
from .runtime_config import RuntimeConfig
from .systemd import systemctl

logger = logging.getLogger(__name__)


def activate(ctx: InstallCtx, runtime_config: RuntimeConfig) -> bool:
    """Register the service with systemd and start it when the LCD is enabled.

    Returns True if the service was started. A start failure raises
    ``ServiceStartFailed`` (recoverable) unless the host is configured to treat
    it as fatal: the framebuffer normally appears only after the overlay has
    been loaded by a reboot.
    """

    unit = f"{ctx.cfg.service_name}.service"

    r = systemctl("daemon-reload", dry_run=ctx.dry_run)
    if not r.ok:
        raise SupervisorReloadFailed(f"Failed to reload systemd (exit {r.returncode})")

    r = systemctl("enable", unit, dry_run=ctx.dry_run)
    if not r.ok:
        raise ServiceEnableFailed(f"Failed to enable {unit} (exit {r.returncode})")

    if not runtime_config.lcd_active:
        logger.info("LCD is disabled in configuration, service not started")
        return False

    logger.info("Starting LCD service...")
    r = systemctl("start", unit, dry_run=ctx.dry_run)
    if not r.ok:
        if ctx.cfg.start_failure_fatal:
            raise StrictServiceStartFailed(f"Failed to start {unit} (exit {r.returncode})")
        raise ServiceStartFailed(
            f"Failed to start {unit} (exit {r.returncode}); may require reboot for dtoverlay"
        )

    logger.info("Service started successfully")
    return True
