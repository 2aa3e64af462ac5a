from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from ..context import InstallCtx
from ..errors import (
    CompositorInstallFailed,
    DependencyInstallFailed,
    NativeModuleBuildFailed,
    PrebuiltExtractionFailed,
)
from ..models import ArtifactSource, InstallRun
from .command import CommandError, run_cmd
from .node import npm_install_production, npm_run
from .pkg import apt_install

logger = logging.getLogger(__name__)

NATIVE_BUILD_SCRIPT = "install_rdmlcd"


def artifact_key(machine: str, runtime_major: int) -> str:
    return f"{machine}-node{runtime_major}"


def extract_prebuilt(archive: Path, dest: Path, *, dry_run: bool = False) -> None:
    try:
        if not dry_run:
            dest.mkdir(parents=True, exist_ok=True)
        run_cmd(["tar", "-xzf", str(archive)], cwd=str(dest), dry_run=dry_run)
    except (CommandError, OSError) as e:
        raise PrebuiltExtractionFailed(f"Failed to extract {archive}: {e}") from e


def rebuild_native_module(ctx: InstallCtx) -> None:
    """Compile only the rgb565 module, judging success by exit status and output file."""

    native_dir = ctx.native_dir
    if not native_dir.is_dir():
        raise NativeModuleBuildFailed(f"Native module source directory missing: {native_dir}")

    r = npm_run(NATIVE_BUILD_SCRIPT, native_dir, npm_bin=ctx.cfg.npm_bin, dry_run=ctx.dry_run)
    if not r.ok:
        raise NativeModuleBuildFailed(f"Native module compilation failed (exit {r.returncode})")
    if ctx.dry_run:
        return
    if not ctx.native_module_artifact.exists():
        raise NativeModuleBuildFailed(
            f"Native module build finished but {ctx.native_module_artifact} was not produced"
        )


def build_from_source(ctx: InstallCtx, build_packages: Sequence[str]) -> None:
    logger.info("Installing build dependencies for compilation...")
    try:
        apt_install(build_packages, dry_run=ctx.dry_run)
    except CommandError as e:
        raise DependencyInstallFailed(f"Failed to install build dependencies: {e}") from e

    logger.info("Compiling compositor from source (this may take 15+ minutes on slower systems)...")
    if not ctx.dry_run and not ctx.compositor_dir.is_dir():
        raise CompositorInstallFailed(f"Compositor directory missing: {ctx.compositor_dir}")

    r = npm_install_production(ctx.compositor_dir, npm_bin=ctx.cfg.npm_bin, dry_run=ctx.dry_run)
    if not r.ok:
        raise CompositorInstallFailed(
            f"Failed to install compositor packages or compile native module (exit {r.returncode})"
        )
    logger.info("Compositor packages installed successfully")

    if ctx.dry_run:
        logger.info("Would verify %s", ctx.native_module_artifact)
        return

    if not ctx.native_module_artifact.exists():
        logger.warning("Native module not found at expected location: %s", ctx.native_module_artifact)
        logger.info("Attempting manual compilation...")
        rebuild_native_module(ctx)

    logger.info("Native module compiled successfully")


def resolve(
    ctx: InstallCtx,
    run: InstallRun,
    *,
    machine: Optional[str],
    runtime_major: Optional[int],
) -> ArtifactSource:
    """Install the compositor from a prebuilt archive, else build it on the device."""

    if machine and runtime_major is not None:
        key = artifact_key(machine, runtime_major)
        archive = ctx.prebuilt_archive(key)
        if archive.is_file():
            logger.info("Found prebuilt compositor for %s", key)
            logger.info("Using prebuilt version (fast installation, no compilation needed)...")
            run.set_artifact_source(ArtifactSource.PREBUILT)
            try:
                extract_prebuilt(archive, ctx.compositor_dir, dry_run=ctx.dry_run)
            except PrebuiltExtractionFailed as e:
                logger.warning("%s; will compile from source", e)
                run.warn(f"{e.kind}: {e}")
                run.set_artifact_source(ArtifactSource.SOURCE_BUILD)
            else:
                logger.info("Prebuilt compositor installed successfully")
                return run.artifact_source
        else:
            logger.info("No prebuilt available for %s", key)
            run.set_artifact_source(ArtifactSource.SOURCE_BUILD)
    else:
        msg = "Runtime version or machine type unknown; skipping prebuilt lookup"
        logger.warning(msg)
        run.warn(msg)
        run.set_artifact_source(ArtifactSource.SOURCE_BUILD)

    build_from_source(ctx, ctx.cfg.build_packages)
    return run.artifact_source
