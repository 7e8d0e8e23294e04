from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .context import BootstrapContext

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: BootstrapContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(*, ctx: BootstrapContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps strictly in order; the first exception stops the run."""

    for step in steps:
        ctx.decisions["current_step"] = step.step_id
        logger.info("--- Running step %s ---", step.step_id)
        step.run(ctx)
        ctx.ran_steps.append(step.step_id)

    ctx.decisions["current_step"] = None
    return PipelineResult(ran_steps=list(ctx.ran_steps))
