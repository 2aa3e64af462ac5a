from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootOverlayDescriptor:
    name: str = "raspdac-mini-lcd"
    comment: str = "# RaspDacMini LCD Display"

    @property
    def asset_name(self) -> str:
        return f"{self.name}.dtbo"

    @property
    def directive(self) -> str:
        return f"dtoverlay={self.name}"


def ensure_directive(config_path: str | Path, overlay: BootOverlayDescriptor, *, dry_run: bool = False) -> bool:
    """Append the overlay directive unless the file already mentions it.

    Returns True if the file was changed. A missing file is created.
    """

    p = Path(config_path)
    current = p.read_text(encoding="utf-8", errors="ignore") if p.exists() else ""
    if overlay.directive in current:
        logger.info("Boot configuration already contains %s", overlay.directive)
        return False

    if dry_run:
        logger.info("Would append %s to %s", overlay.directive, str(p))
        return True

    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as f:
        if current and not current.endswith("\n"):
            f.write("\n")
        f.write(f"\n{overlay.comment}\n{overlay.directive}\n")
    logger.info("Boot configuration updated")
    return True
