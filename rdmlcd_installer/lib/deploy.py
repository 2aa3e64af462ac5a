from __future__ import annotations

import logging

from ..context import InstallCtx
from ..errors import BootConfigUpdateFailed, OverlayAssetMissing, OverlayInstallFailed, ServiceUnitWriteFailed
from .assets import copy_file, write_file
from .bootconfig import BootOverlayDescriptor, ensure_directive
from .runtime_config import DEFAULT_SLEEP_AFTER, RuntimeConfig
from .systemd import ServiceEnvironment, ServiceUnitDescriptor, render_override, render_unit

logger = logging.getLogger(__name__)

OVERLAY = BootOverlayDescriptor()


def build_unit(ctx: InstallCtx) -> ServiceUnitDescriptor:
    return ServiceUnitDescriptor(
        description="RaspDacMini LCD Display Service",
        after=("volumio.service",),
        requires=("volumio.service",),
        user=ctx.cfg.service_user,
        working_directory=str(ctx.compositor_dir),
        # Base value only; the drop-in written next to the unit takes precedence.
        environment={"SLEEP_AFTER": str(DEFAULT_SLEEP_AFTER)},
        exec_start=f"/usr/bin/node index.js volumio {ctx.cfg.framebuffer}",
    )


def build_environment(runtime_config: RuntimeConfig) -> ServiceEnvironment:
    return ServiceEnvironment(values={"SLEEP_AFTER": str(runtime_config.sleep_after)})


def install_overlay(ctx: InstallCtx) -> None:
    asset = ctx.assets_dir / OVERLAY.asset_name
    if not asset.is_file():
        raise OverlayAssetMissing(
            f"Device tree overlay not found in assets/. Please add {OVERLAY.asset_name} to {ctx.assets_dir}"
        )
    try:
        copy_file(asset, ctx.overlay_dir, dry_run=ctx.dry_run)
    except OSError as e:
        raise OverlayInstallFailed(f"Failed to copy device tree overlay: {e}") from e
    logger.info("Device tree overlay installed successfully")


def install(ctx: InstallCtx, runtime_config: RuntimeConfig) -> None:
    """Place the overlay, boot directive, unit file and environment drop-in."""

    logger.info("Installing device tree overlay...")
    install_overlay(ctx)

    logger.info("Configuring boot parameters...")
    try:
        ensure_directive(ctx.boot_config_path, OVERLAY, dry_run=ctx.dry_run)
    except OSError as e:
        raise BootConfigUpdateFailed(f"Failed to update {ctx.boot_config_path}: {e}") from e

    logger.info("Creating systemd service file...")
    try:
        write_file(ctx.unit_path, render_unit(build_unit(ctx)), dry_run=ctx.dry_run)
    except OSError as e:
        raise ServiceUnitWriteFailed(f"Failed to create service file: {e}") from e
    logger.info("Service file created successfully")

    logger.info("Creating service environment override...")
    env = build_environment(runtime_config)
    try:
        write_file(ctx.override_path, render_override(env), dry_run=ctx.dry_run)
    except OSError as e:
        raise ServiceUnitWriteFailed(f"Failed to create service override: {e}") from e
    logger.info("Service environment configured: SLEEP_AFTER=%s", runtime_config.sleep_after)
