from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestartPolicy:
    restart: str = "on-failure"
    restart_sec: int = 5
    # At most `burst` starts within `interval_sec`, then systemd gives up.
    start_limit_interval_sec: int = 200
    start_limit_burst: int = 5


@dataclass(frozen=True)
class ServiceUnitDescriptor:
    description: str
    working_directory: str
    exec_start: str
    user: str = "root"
    service_type: str = "simple"
    after: Tuple[str, ...] = ()
    requires: Tuple[str, ...] = ()
    environment: Dict[str, str] = field(default_factory=dict)
    kill_signal: str = "SIGINT"
    restart: RestartPolicy = RestartPolicy()
    wanted_by: str = "multi-user.target"


@dataclass(frozen=True)
class ServiceEnvironment:
    """Per-unit environment written as a drop-in, separate from the unit file."""

    values: Dict[str, str]


def _env_lines(env: Dict[str, str]) -> list[str]:
    return [f'Environment="{k}={v}"' for k, v in env.items()]


def render_unit(unit: ServiceUnitDescriptor) -> str:
    lines = ["[Unit]", f"Description={unit.description}"]
    if unit.after:
        lines.append(f"After={' '.join(unit.after)}")
    if unit.requires:
        lines.append(f"Requires={' '.join(unit.requires)}")
    lines += [
        "",
        "[Service]",
        f"Type={unit.service_type}",
        f"User={unit.user}",
        f"WorkingDirectory={unit.working_directory}",
        *_env_lines(unit.environment),
        f"ExecStart={unit.exec_start}",
        "StandardOutput=journal",
        "StandardError=journal",
        f"KillSignal={unit.kill_signal}",
        f"Restart={unit.restart.restart}",
        f"RestartSec={unit.restart.restart_sec}",
        f"StartLimitInterval={unit.restart.start_limit_interval_sec}",
        f"StartLimitBurst={unit.restart.start_limit_burst}",
        "",
        "[Install]",
        f"WantedBy={unit.wanted_by}",
        "",
    ]
    return "\n".join(lines)


def render_override(env: ServiceEnvironment) -> str:
    return "\n".join(["[Service]", *_env_lines(env.values), ""])


def systemctl(*args: str, dry_run: bool = False) -> CmdResult:
    return run_cmd(["systemctl", *args], check=False, dry_run=dry_run)
