from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Defaults:
    plugin_dir: str = "/data/plugins/system_hardware/raspdac_mini_lcd"
    lock_file: str = "/home/volumio/raspdac_mini_lcd.installing"
    boot_dir: str = "/boot"
    systemd_dir: str = "/etc/systemd/system"
    log_default: str = "/var/log/rdmlcd-install.log"


DEFAULTS = Defaults()

# Printed as the very last stdout line of a run; Volumio waits for it.
INSTALL_END_SENTINEL = "plugininstallend"
