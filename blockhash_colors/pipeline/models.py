"""Pydantic models for pipeline runs."""

from enum import StrEnum

from pydantic import BaseModel, Field

from blockhash_colors.ledger.models import BlockMetadata
from blockhash_colors.palette.models import Color, ColorSwatch
from blockhash_colors.publish.models import OutputEntry


class PipelineStep(StrEnum):
    """States of a single run, in execution order."""

    FETCHING = "fetching"
    NORMALIZING = "normalizing"
    DERIVING = "deriving"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


class PipelineResult(BaseModel):
    """Summary of one run, returned to the CLI or any other trigger."""

    success: bool
    hash: str | None = Field(default=None, description="Normalized block hash")
    colors: list[str] = Field(default_factory=list, description="Palette hex values")
    primary: ColorSwatch | None = None
    accent: Color | None = None
    metadata: BlockMetadata = Field(default_factory=BlockMetadata)
    outputs: list[OutputEntry] = Field(default_factory=list)
    duration_ms: float = Field(default=0.0, description="Wall time of the run")
    step: PipelineStep = Field(
        default=PipelineStep.DONE, description="Terminal state: DONE or FAILED"
    )
    failed_step: PipelineStep | None = Field(
        default=None, description="Step that was running when the run failed"
    )
    attempts: int = Field(default=1, description="Whole-pipeline attempts made")
    errors: list[str] = Field(default_factory=list)


__all__ = ["PipelineResult", "PipelineStep"]
