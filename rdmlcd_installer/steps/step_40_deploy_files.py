from __future__ import annotations

from ..context import InstallCtx
from ..lib.deploy import install
from ..lib.runtime_config import RuntimeConfig
from ..models import InstallRun


class DeployFilesStep:
    step_id = "40_deploy_files"

    def __init__(self, runtime_config: RuntimeConfig) -> None:
        self.runtime_config = runtime_config

    def run(self, ctx: InstallCtx, run: InstallRun) -> None:
        install(ctx, self.runtime_config)
