from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .context import InstallCtx
from .errors import FatalError, PreconditionError
from .models import InstallRun, Outcome
from .rollback import RollbackHandler

logger = logging.getLogger(__name__)


class Step(Protocol):
    """One guarded stage of the install plan."""

    step_id: str

    def run(self, ctx: InstallCtx, run: InstallRun) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    run: InstallRun
    ran_steps: List[str]


def run_pipeline(
    *,
    ctx: InstallCtx,
    run: InstallRun,
    steps: Sequence[Step],
    handler: RollbackHandler,
) -> PipelineResult:
    """Run steps in order; the first fatal error ends the process via ``handler``."""

    ran: List[str] = []

    for step in steps:
        logger.info("Running step %s", step.step_id)
        try:
            step.run(ctx, run)
        except PreconditionError as e:
            handler.terminate(run, e, step_id=step.step_id)
        except FatalError as e:
            handler.rollback(run, e, step_id=step.step_id)
        except KeyboardInterrupt as e:
            handler.rollback(run, e, step_id=step.step_id, exit_code=130)
        except Exception as e:
            logger.exception("Unexpected error in step %s", step.step_id)
            handler.rollback(run, e, step_id=step.step_id)
        logger.info("Completed step %s", step.step_id)
        ran.append(step.step_id)

    run.outcome = Outcome.SUCCESS
    if run.warnings:
        logger.info("Finished with %d warning(s)", len(run.warnings))
    handler.signal.emit()
    return PipelineResult(run=run, ran_steps=ran)
