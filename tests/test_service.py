from __future__ import annotations

import pytest

from rdmlcd_installer.context import InstallCtx
from rdmlcd_installer.errors import (
    ServiceEnableFailed,
    ServiceStartFailed,
    StrictServiceStartFailed,
    SupervisorReloadFailed,
)
from rdmlcd_installer.installer_config import InstallerConfig
from rdmlcd_installer.lib.runtime_config import RuntimeConfig
from rdmlcd_installer.lib.service import activate


def test_reload_enable_start(host, ctx):
    assert activate(ctx, RuntimeConfig(lcd_active=True)) is True
    assert [c.argv for c in host.ran("systemctl")] == [
        ["systemctl", "daemon-reload"],
        ["systemctl", "enable", "rdmlcd.service"],
        ["systemctl", "start", "rdmlcd.service"],
    ]


def test_disabled_lcd_is_enabled_not_started(host, ctx):
    assert activate(ctx, RuntimeConfig(lcd_active=False)) is False
    assert host.ran("systemctl", "enable", "rdmlcd.service")
    assert host.ran("systemctl", "start") == []


def test_reload_failure(host, ctx):
    host.on("systemctl", "daemon-reload", returncode=1)
    with pytest.raises(SupervisorReloadFailed):
        activate(ctx, RuntimeConfig())
    assert host.ran("systemctl", "enable") == []


def test_enable_failure(host, ctx):
    host.on("systemctl", "enable", returncode=1)
    with pytest.raises(ServiceEnableFailed):
        activate(ctx, RuntimeConfig())
    assert host.ran("systemctl", "start") == []


def test_start_failure_is_recoverable_by_default(host, ctx):
    host.on("systemctl", "start", returncode=1)
    with pytest.raises(ServiceStartFailed, match="reboot"):
        activate(ctx, RuntimeConfig())


def test_start_failure_can_be_made_fatal(host, layout):
    raw = layout.raw_config()
    raw["service"] = {"start_failure_fatal": True}
    ctx = InstallCtx(cfg=InstallerConfig(raw=raw))
    host.on("systemctl", "start", returncode=1)

    with pytest.raises(StrictServiceStartFailed) as exc:
        activate(ctx, RuntimeConfig())
    assert exc.value.kind == "ServiceStartFailed"
