from __future__ import annotations

import pytest

from rdmlcd_installer.context import InstallCtx
from rdmlcd_installer.installer_config import (
    DEFAULT_SYSTEM_PACKAGES,
    InstallerConfig,
    load_installer_config,
    with_overrides,
)


def test_defaults():
    cfg = load_installer_config(None)

    assert cfg.plugin_dir == "/data/plugins/system_hardware/raspdac_mini_lcd"
    assert cfg.lock_path == "/home/volumio/raspdac_mini_lcd.installing"
    assert cfg.boot_config_path == "/boot/userconfig.txt"
    assert cfg.overlay_dir == "/boot/overlays"
    assert cfg.system_packages == DEFAULT_SYSTEM_PACKAGES
    assert cfg.build_packages == ["build-essential"]
    assert cfg.service_name == "rdmlcd"
    assert cfg.framebuffer == "/dev/fb1"
    assert cfg.start_failure_fatal is False
    assert cfg.owner == "volumio:volumio"


def test_yaml_values(tmp_path):
    p = tmp_path / "installer.yml"
    p.write_text(
        "paths:\n"
        "  boot_dir: /mnt/boot\n"
        "  owner: ''\n"
        "dependencies:\n"
        "  packages: [jq, ' fbset ', '']\n"
        "service:\n"
        "  start_failure_fatal: true\n",
        encoding="utf-8",
    )
    cfg = load_installer_config(str(p))

    assert cfg.boot_config_path == "/mnt/boot/userconfig.txt"
    assert cfg.system_packages == ["jq", "fbset"]
    assert cfg.start_failure_fatal is True
    assert cfg.owner is None


def test_empty_yaml_is_defaults(tmp_path):
    p = tmp_path / "installer.yaml"
    p.write_text("", encoding="utf-8")
    assert load_installer_config(str(p)).raw == {}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_installer_config(str(tmp_path / "nope.yaml"))


def test_wrong_suffix(tmp_path):
    p = tmp_path / "installer.toml"
    p.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="YAML"):
        load_installer_config(str(p))


def test_non_mapping(tmp_path):
    p = tmp_path / "installer.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_installer_config(str(p))


def test_package_list_must_be_a_list():
    cfg = InstallerConfig(raw={"dependencies": {"packages": "jq fbset"}})
    with pytest.raises(ValueError):
        cfg.system_packages


def test_overrides_do_not_mutate_original():
    base = InstallerConfig(raw={"paths": {"plugin_dir": "/a"}})

    cfg = with_overrides(base, plugin_dir="/b", start_failure_fatal=True)

    assert cfg.plugin_dir == "/b"
    assert cfg.start_failure_fatal is True
    assert base.plugin_dir == "/a"
    assert base.start_failure_fatal is False


def test_context_paths():
    ctx = InstallCtx(cfg=InstallerConfig(raw={"paths": {"plugin_dir": "/p", "systemd_dir": "/s"}}))

    assert str(ctx.native_module_artifact) == "/p/compositor/utils/rgb565.node"
    assert str(ctx.native_dir) == "/p/native/rgb565"
    assert str(ctx.prebuilt_archive("aarch64-node18")) == "/p/assets/compositor-aarch64-node18.tar.gz"
    assert str(ctx.unit_path) == "/s/rdmlcd.service"
    assert str(ctx.override_path) == "/s/rdmlcd.service.d/override.conf"


@pytest.mark.parametrize("document", ["paths: /x\n", "dependencies: [jq]\n", "runtime: node\n"])
def test_section_must_be_mapping(tmp_path, document):
    p = tmp_path / "installer.yaml"
    p.write_text(document, encoding="utf-8")
    with pytest.raises(ValueError, match="must be a mapping"):
        load_installer_config(str(p))


def test_empty_section_is_defaults(tmp_path):
    p = tmp_path / "installer.yaml"
    p.write_text("paths:\n", encoding="utf-8")
    assert load_installer_config(str(p)).plugin_dir == "/data/plugins/system_hardware/raspdac_mini_lcd"
