from __future__ import annotations

import io
import json
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from rdmlcd_installer.context import InstallCtx
from rdmlcd_installer.installer_config import InstallerConfig
from rdmlcd_installer.lib import command
from rdmlcd_installer.lib.protocol import TerminalSignal


@dataclass
class _Rule:
    prefix: Tuple[str, ...]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    effect: Optional[Callable[[List[str], Optional[str]], None]] = None


@dataclass
class Call:
    argv: List[str]
    cwd: Optional[str]
    env: Optional[Dict[str, str]]


@dataclass
class FakeHost:
    """Scripted stand-in for subprocess.run.

    Rules match on an argv prefix; the most recently added matching rule wins.
    Unmatched commands succeed with empty output.
    """

    rules: List[_Rule] = field(default_factory=list)
    calls: List[Call] = field(default_factory=list)

    def on(self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = "", effect=None) -> "FakeHost":
        self.rules.append(_Rule(tuple(prefix), returncode, stdout, stderr, effect))
        return self

    def __call__(self, argv, input=None, text=None, stdout=None, stderr=None, cwd=None, env=None, **_: Any):
        argv = list(argv)
        self.calls.append(Call(argv=argv, cwd=cwd, env=env))
        for rule in reversed(self.rules):
            if tuple(argv[: len(rule.prefix)]) == rule.prefix:
                if rule.effect is not None:
                    rule.effect(argv, cwd)
                return subprocess.CompletedProcess(argv, rule.returncode, rule.stdout, rule.stderr)
        return subprocess.CompletedProcess(argv, 0, "", "")

    def ran(self, *prefix: str) -> List[Call]:
        return [c for c in self.calls if tuple(c.argv[: len(prefix)]) == prefix]


@dataclass
class Layout:
    root: Path
    plugin_dir: Path
    boot_dir: Path
    systemd_dir: Path
    lock_path: Path

    @property
    def boot_config(self) -> Path:
        return self.boot_dir / "userconfig.txt"

    @property
    def native_artifact(self) -> Path:
        return self.plugin_dir / "compositor" / "utils" / "rgb565.node"

    @property
    def unit_path(self) -> Path:
        return self.systemd_dir / "rdmlcd.service"

    @property
    def override_path(self) -> Path:
        return self.systemd_dir / "rdmlcd.service.d" / "override.conf"

    def write_runtime_config(self, **values: Any) -> None:
        doc = {k: {"type": "any", "value": v} for k, v in values.items()}
        (self.plugin_dir / "config.json").write_text(json.dumps(doc), encoding="utf-8")

    def add_prebuilt(self, key: str = "armv7l-node20") -> Path:
        p = self.plugin_dir / "assets" / f"compositor-{key}.tar.gz"
        p.write_bytes(b"\x1f\x8b fake archive")
        return p

    def raw_config(self) -> Dict[str, Any]:
        return {
            "paths": {
                "plugin_dir": str(self.plugin_dir),
                "lock_file": str(self.lock_path),
                "boot_dir": str(self.boot_dir),
                "systemd_dir": str(self.systemd_dir),
                "owner": "volumio:volumio",
            }
        }


def _create_artifact(path: Path):
    def effect(argv, cwd):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\x7fELF")

    return effect


@pytest.fixture
def layout(tmp_path: Path) -> Layout:
    plugin = tmp_path / "plugin"
    (plugin / "compositor").mkdir(parents=True)
    (plugin / "native" / "rgb565").mkdir(parents=True)
    (plugin / "assets").mkdir(parents=True)
    (plugin / "assets" / "raspdac-mini-lcd.dtbo").write_bytes(b"\xd0\x0d\xfe\xed")
    boot = tmp_path / "boot"
    (boot / "overlays").mkdir(parents=True)
    (boot / "userconfig.txt").write_text("# user config\n", encoding="utf-8")
    systemd = tmp_path / "systemd"
    systemd.mkdir()
    home = tmp_path / "home"
    home.mkdir()
    lay = Layout(
        root=tmp_path,
        plugin_dir=plugin,
        boot_dir=boot,
        systemd_dir=systemd,
        lock_path=home / "raspdac_mini_lcd.installing",
    )
    lay.write_runtime_config(sleep_after=900, lcd_active=True)
    return lay


@pytest.fixture
def host(monkeypatch, layout: Layout) -> FakeHost:
    fake = FakeHost()
    fake.on("dpkg", "--print-architecture", stdout="armhf\n")
    fake.on("uname", "-m", stdout="armv7l\n")
    fake.on("node", "--version", stdout="v20.11.0\n")
    # The compositor's preinstall hook normally compiles the native module.
    fake.on("npm", "install", effect=_create_artifact(layout.native_artifact))
    monkeypatch.setattr(command.subprocess, "run", fake)
    return fake


@pytest.fixture
def create_artifact():
    return _create_artifact


@pytest.fixture
def ctx(layout: Layout) -> InstallCtx:
    return InstallCtx(cfg=InstallerConfig(raw=layout.raw_config()))


@pytest.fixture
def signal_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def signal(signal_stream: io.StringIO) -> TerminalSignal:
    return TerminalSignal(stream=signal_stream)
