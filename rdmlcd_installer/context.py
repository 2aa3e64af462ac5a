from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .installer_config import InstallerConfig


@dataclass(frozen=True)
class InstallCtx:
    cfg: InstallerConfig
    dry_run: bool = False

    @property
    def plugin_dir(self) -> Path:
        return Path(self.cfg.plugin_dir)

    @property
    def compositor_dir(self) -> Path:
        return self.plugin_dir / "compositor"

    @property
    def native_dir(self) -> Path:
        return self.plugin_dir / "native" / "rgb565"

    @property
    def assets_dir(self) -> Path:
        return self.plugin_dir / "assets"

    @property
    def runtime_config_path(self) -> Path:
        return self.plugin_dir / "config.json"

    @property
    def native_module_artifact(self) -> Path:
        return self.compositor_dir / "utils" / "rgb565.node"

    @property
    def lock_path(self) -> Path:
        return Path(self.cfg.lock_path)

    @property
    def boot_config_path(self) -> Path:
        return Path(self.cfg.boot_config_path)

    @property
    def overlay_dir(self) -> Path:
        return Path(self.cfg.overlay_dir)

    @property
    def unit_path(self) -> Path:
        return Path(self.cfg.systemd_dir) / f"{self.cfg.service_name}.service"

    @property
    def override_path(self) -> Path:
        return Path(self.cfg.systemd_dir) / f"{self.cfg.service_name}.service.d" / "override.conf"

    def prebuilt_archive(self, artifact_key: str) -> Path:
        return self.assets_dir / f"compositor-{artifact_key}.tar.gz"
