from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_file(src: str | Path, dst_dir: str | Path, *, dry_run: bool = False) -> Path:
    s = Path(src)
    d = Path(dst_dir)
    if not s.is_file():
        raise FileNotFoundError(str(s))

    out = d / s.name
    if dry_run:
        logger.info("Would copy %s -> %s", str(s), str(out))
        return out

    d.mkdir(parents=True, exist_ok=True)
    shutil.copy2(s, out)
    return out


def write_file(path: str | Path, contents: str, *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would write %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
