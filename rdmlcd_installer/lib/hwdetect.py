from __future__ import annotations

import logging
from typing import Optional

from .command import run_cmd

logger = logging.getLogger(__name__)

SUPPORTED_ARCHES = ("armhf", "arm64")


def normalize_arch(machine: str) -> str:
    m = machine.lower()
    return {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
        "armv7l": "armhf",
        "armv6l": "armhf",
        "armhf": "armhf",
    }.get(m, m)


def machine_name() -> Optional[str]:
    """Kernel machine string (``uname -m``), e.g. armv7l or aarch64."""

    r = run_cmd(["uname", "-m"], check=False)
    name = (r.stdout or "").strip()
    return name or None


def detect_arch() -> str:
    """Debian architecture of the host.

    dpkg is authoritative; ``uname -m`` is only consulted when dpkg is missing.
    """

    r = run_cmd(["dpkg", "--print-architecture"], check=False)
    arch = (r.stdout or "").strip()
    if r.ok and arch:
        return arch

    logger.info("dpkg did not report an architecture; falling back to uname -m")
    machine = machine_name()
    return normalize_arch(machine) if machine else "unknown"
