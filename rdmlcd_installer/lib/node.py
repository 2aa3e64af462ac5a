from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^v?(\d+)\.")


def parse_major(version: str) -> Optional[int]:
    """``v20.11.0`` -> 20."""

    m = _VERSION_RE.match(version.strip())
    return int(m.group(1)) if m else None


def node_major(node_bin: str = "node") -> Optional[int]:
    r = run_cmd([node_bin, "--version"], check=False)
    if not r.ok:
        logger.warning("Unable to run %s --version (exit %s)", node_bin, r.returncode)
        return None
    major = parse_major(r.stdout)
    if major is None:
        logger.warning("Unrecognised node version string: %r", r.stdout.strip())
    return major


def npm_install_production(compositor_dir: Path, *, npm_bin: str = "npm", dry_run: bool = False) -> CmdResult:
    # The rgb565 native module is compiled by the compositor's preinstall hook.
    return run_cmd([npm_bin, "install", "--omit=dev"], cwd=str(compositor_dir), check=False, dry_run=dry_run)


def npm_run(script: str, cwd: Path, *, npm_bin: str = "npm", dry_run: bool = False) -> CmdResult:
    return run_cmd([npm_bin, "run", script], cwd=str(cwd), check=False, dry_run=dry_run)
