from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .lib.env import DEFAULTS

DEFAULT_SYSTEM_PACKAGES = [
    "build-essential",
    "libcairo2-dev",
    "libpango1.0-dev",
    "libjpeg-dev",
    "libgif-dev",
    "librsvg2-dev",
    "fbset",
    "jq",
]

SECTIONS = ("paths", "dependencies", "runtime", "service")


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def plugin_dir(self) -> str:
        return str(self._section("paths").get("plugin_dir") or DEFAULTS.plugin_dir)

    @property
    def lock_path(self) -> str:
        return str(self._section("paths").get("lock_file") or DEFAULTS.lock_file)

    @property
    def boot_dir(self) -> str:
        return str(self._section("paths").get("boot_dir") or DEFAULTS.boot_dir)

    @property
    def boot_config_path(self) -> str:
        p = self._section("paths").get("boot_config")
        return str(p) if p else str(Path(self.boot_dir) / "userconfig.txt")

    @property
    def overlay_dir(self) -> str:
        p = self._section("paths").get("overlay_dir")
        return str(p) if p else str(Path(self.boot_dir) / "overlays")

    @property
    def systemd_dir(self) -> str:
        return str(self._section("paths").get("systemd_dir") or DEFAULTS.systemd_dir)

    @property
    def system_packages(self) -> List[str]:
        pkgs = self._section("dependencies").get("packages")
        if pkgs is None:
            return list(DEFAULT_SYSTEM_PACKAGES)
        if not isinstance(pkgs, list):
            raise ValueError("dependencies.packages must be a list")
        return [str(p).strip() for p in pkgs if str(p).strip()]

    @property
    def build_packages(self) -> List[str]:
        pkgs = self._section("dependencies").get("build_packages")
        if pkgs is None:
            return ["build-essential"]
        if not isinstance(pkgs, list):
            raise ValueError("dependencies.build_packages must be a list")
        return [str(p).strip() for p in pkgs if str(p).strip()]

    @property
    def node_bin(self) -> str:
        return str(self._section("runtime").get("node") or "node")

    @property
    def npm_bin(self) -> str:
        return str(self._section("runtime").get("npm") or "npm")

    @property
    def service_name(self) -> str:
        return str(self._section("service").get("name") or "rdmlcd")

    @property
    def service_user(self) -> str:
        return str(self._section("service").get("user") or "root")

    @property
    def framebuffer(self) -> str:
        return str(self._section("service").get("framebuffer") or "/dev/fb1")

    @property
    def start_failure_fatal(self) -> bool:
        return bool(self._section("service").get("start_failure_fatal", False))

    @property
    def owner(self) -> Optional[str]:
        """user:group applied to the plugin tree at the end; empty disables it."""
        owner = self._section("paths").get("owner", "volumio:volumio")
        return str(owner) if owner else None


def load_installer_config(path: Optional[str]) -> InstallerConfig:
    if path is None:
        return InstallerConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("installer config must contain a mapping/object")
    for name in SECTIONS:
        if raw.get(name) is not None and not isinstance(raw[name], dict):
            raise ValueError(f"installer config section '{name}' must be a mapping")

    return InstallerConfig(raw=raw)


def with_overrides(
    cfg: InstallerConfig,
    *,
    plugin_dir: Optional[str] = None,
    start_failure_fatal: Optional[bool] = None,
) -> InstallerConfig:
    """Return a copy with CLI overrides applied on top of the file values."""

    raw = {k: (dict(v) if isinstance(v, dict) else v) for k, v in cfg.raw.items()}
    if plugin_dir:
        raw.setdefault("paths", {})["plugin_dir"] = plugin_dir
    if start_failure_fatal:
        raw.setdefault("service", {})["start_failure_fatal"] = True
    return InstallerConfig(raw=raw)
