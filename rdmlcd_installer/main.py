from __future__ import annotations

import argparse
import logging
from typing import Optional

import yaml

from .context import InstallCtx
from .installer_config import load_installer_config, with_overrides
from .lib.lock import InstallLock
from .lib.protocol import TerminalSignal
from .lib.runtime_config import RuntimeConfig, load_runtime_config
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .models import InstallRun, Outcome
from .pipeline import Step, run_pipeline
from .rollback import RollbackHandler
from .steps import (
    ActivateServiceStep,
    CheckPreconditionsStep,
    DeployFilesStep,
    ProvisionDependenciesStep,
    ResolveCompositorStep,
)

logger = logging.getLogger(__name__)


def build_steps(lock: InstallLock, runtime_config: RuntimeConfig) -> list[Step]:
    return [
        CheckPreconditionsStep(lock),
        ProvisionDependenciesStep(),
        ResolveCompositorStep(),
        DeployFilesStep(runtime_config),
        ActivateServiceStep(runtime_config, lock),
    ]


def install(ctx: InstallCtx, *, signal: Optional[TerminalSignal] = None) -> InstallRun:
    """Run the whole install plan once.

    Returns the finished ``InstallRun`` on success. Any fatal error emits the
    sentinel and raises ``SystemExit`` with a non-zero code.
    """

    signal = signal or TerminalSignal()
    lock = InstallLock(ctx.lock_path)
    handler = RollbackHandler(lock=lock, signal=signal)
    run = InstallRun()

    runtime_config = load_runtime_config(ctx.runtime_config_path)
    logger.info(
        "Runtime config: sleep_after=%s lcd_active=%s", runtime_config.sleep_after, runtime_config.lcd_active
    )

    result = run_pipeline(ctx=ctx, run=run, steps=build_steps(lock, runtime_config), handler=handler)
    logger.debug("Steps run: %s", ", ".join(result.ran_steps))
    return result.run


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    plugin_dir: Optional[str] = None,
    dry_run: bool = False,
    strict_start: bool = False,
    signal: Optional[TerminalSignal] = None,
) -> InstallRun:
    configure_logging(log_path=log_path)
    signal = signal or TerminalSignal()

    logger.info("Installing RaspDacMini LCD plugin...")
    try:
        cfg = with_overrides(
            load_installer_config(config_path),
            plugin_dir=plugin_dir,
            start_failure_fatal=strict_start,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Invalid installer configuration %s: %s", config_path, e)
        signal.emit()
        raise SystemExit(1) from e

    return install(InstallCtx(cfg=cfg, dry_run=dry_run), signal=signal)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="rdmlcd-install")
    p.add_argument("--config", default=None, help="Installer config (YAML) overriding default paths/packages")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--plugin-dir", default=None, help="Plugin root directory")
    p.add_argument("--dry-run", action="store_true", help="Log commands and writes without performing them")
    p.add_argument(
        "--strict-start",
        action="store_true",
        help="Fail the install if the service cannot be started (hosts without an overlay reboot)",
    )

    args = p.parse_args(argv)

    result = run(
        config_path=args.config,
        log_path=args.log,
        plugin_dir=args.plugin_dir,
        dry_run=bool(args.dry_run),
        strict_start=bool(args.strict_start),
    )
    return 0 if result.outcome is Outcome.SUCCESS else 1


if __name__ == "__main__":
    raise SystemExit(main())
