from __future__ import annotations

import logging
from typing import Sequence

from ..errors import DependencyInstallFailed, DependencyRefreshFailed
from .command import CommandError, run_cmd

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def apt_update(*, dry_run: bool = False) -> None:
    run_cmd(["apt-get", "update"], env=APT_ENV, dry_run=dry_run)


def apt_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    """Install packages as one batch; apt treats already-installed ones as no-ops."""

    if not packages:
        return
    run_cmd(["apt-get", "install", "-y", *packages], env=APT_ENV, dry_run=dry_run)


def provision(packages: Sequence[str], *, dry_run: bool = False) -> None:
    """Refresh the package index and install the required system packages.

    Any failure is total: a partially installed batch is not accepted.
    """

    try:
        apt_update(dry_run=dry_run)
    except CommandError as e:
        raise DependencyRefreshFailed(f"Failed to update package list: {e}") from e

    try:
        apt_install(packages, dry_run=dry_run)
    except CommandError as e:
        raise DependencyInstallFailed(f"Failed to install system dependencies: {e}") from e

    logger.info("System dependencies installed successfully")
