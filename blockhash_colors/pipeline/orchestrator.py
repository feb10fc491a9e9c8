r"""Pipeline orchestrator.

Runs one fetch → normalize → derive → publish pass:

    FETCHING -> NORMALIZING -> DERIVING -> PUBLISHING -> DONE
         \            \            \            \
          +------------+------------+------------+--> FAILED

The first failing step ends the run. Network retries happen inside the
hash source; :meth:`Pipeline.run_with_retries` is a separate, coarser
wrapper that re-runs the whole sequence when fetching failed.

Usage:
    ```python
    from asyncio import run

    from blockhash_colors.helpers.config import load_config
    from blockhash_colors.pipeline.orchestrator import create_pipeline

    result = run(create_pipeline(load_config()).run_once())
    ```
"""

from __future__ import annotations

from asyncio import sleep
import time

from typing import TYPE_CHECKING

from blockhash_colors.exceptions import BlockhashColorsError, PublishPartialFailureError
from blockhash_colors.helpers.logging import get_logger
from blockhash_colors.ledger.models import BlockMetadata
from blockhash_colors.ledger.normalizer import extract_block_metadata, normalize
from blockhash_colors.palette.derive import derive
from blockhash_colors.pipeline.models import PipelineResult, PipelineStep
from blockhash_colors.publish.publisher import Publisher
from blockhash_colors.publish.writers import FileSystemWriter
from blockhash_colors.source.client import HashSourceClient


if TYPE_CHECKING:
    from blockhash_colors.helpers.config import PipelineConfig
    from blockhash_colors.ledger.models import LedgerData
    from blockhash_colors.palette.models import Palette
    from blockhash_colors.protocols import HashSource, OutputWriter
    from blockhash_colors.publish.models import PublishResult


logger = get_logger(__name__)


def merge_metadata(base: BlockMetadata, details: BlockMetadata) -> BlockMetadata:
    """Fill gaps in ``base`` with values from a detailed block lookup."""
    return BlockMetadata(
        height=base.height if base.height is not None else details.height,
        timestamp=base.timestamp if base.timestamp is not None else details.timestamp,
        tx_count=base.tx_count or details.tx_count,
        size=base.size if base.size is not None else details.size,
    )


class Pipeline:
    """Sequences the hash source, normalizer, derivation engine and publisher."""

    def __init__(
        self,
        config: PipelineConfig,
        source: HashSource,
        writer: OutputWriter,
        history_writer: OutputWriter | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Configuration, fixed for the lifetime of the pipeline
            source: Where the latest block comes from
            writer: Where colors.css, colors.json and colors-preview.html go
            history_writer: Optional sink of timestamped JSON copies
        """
        self.config = config
        self.source = source
        self.publisher = Publisher(writer, config.output, history_writer=history_writer)
        self.step = PipelineStep.FETCHING

    def _enter(self, step: PipelineStep) -> None:
        self.step = step
        logger.info("Pipeline step: %s", step.value)

    async def _normalize(self, block: dict) -> LedgerData:
        ledger = normalize(block, self.config.color_derivation.algorithm)

        if self.config.blockchain.fetch_block_details and ledger.hash:
            details = await self.source.fetch_block(ledger.hash)
            if details:
                ledger = ledger.model_copy(
                    update={
                        "metadata": merge_metadata(
                            ledger.metadata, extract_block_metadata(details)
                        )
                    }
                )
        return ledger

    async def run_once(self) -> PipelineResult:
        """Run the pipeline a single time.

        Returns:
            PipelineResult: Success flag, palette summary, duration and, on
                failure, the FAILED state with the failing step and its
                error message
        """
        start = time.perf_counter()
        ledger: LedgerData | None = None
        palette: Palette | None = None
        publish_result: PublishResult | None = None
        errors: list[str] = []

        try:
            self._enter(PipelineStep.FETCHING)
            block = await self.source.fetch_latest_block()

            self._enter(PipelineStep.NORMALIZING)
            ledger = await self._normalize(block)

            self._enter(PipelineStep.DERIVING)
            palette = derive(
                ledger.hash, self.config.color_derivation, ledger.metadata
            )

            self._enter(PipelineStep.PUBLISHING)
            publish_result = self.publisher.publish(palette)
            if not publish_result.success:
                raise PublishPartialFailureError(publish_result)

            self.step = PipelineStep.DONE
        except PublishPartialFailureError as e:
            errors.extend(e.result.errors)
        except BlockhashColorsError as e:
            errors.append(str(e))
        except Exception as e:
            logger.exception("Unexpected error during %s", self.step.value)
            errors.append(f"{type(e).__name__}: {e}")

        duration_ms = (time.perf_counter() - start) * 1000
        success = not errors
        failed_step: PipelineStep | None = None

        if success:
            logger.info("Pipeline complete in %.0fms", duration_ms)
        else:
            failed_step = self.step
            self._enter(PipelineStep.FAILED)
            logger.error(
                "Pipeline failed at %s after %.0fms: %s",
                failed_step.value,
                duration_ms,
                "; ".join(errors),
            )

        return PipelineResult(
            success=success,
            hash=ledger.hash if ledger and ledger.hash else None,
            colors=palette.hex_values if palette else [],
            primary=palette.primary if palette else None,
            accent=palette.accent if palette else None,
            metadata=ledger.metadata if ledger else BlockMetadata(),
            outputs=publish_result.outputs if publish_result else [],
            duration_ms=duration_ms,
            step=self.step,
            failed_step=failed_step,
            errors=errors,
        )

    async def run_with_retries(
        self, retries: int | None = None, delay: float | None = None
    ) -> PipelineResult:
        """Re-run the whole pipeline while it keeps failing at FETCHING.

        Failures in later steps are not transient (the same block hash
        would fail the same way) and are returned immediately.

        Args:
            retries: Extra runs allowed (default: config.pipeline.retries)
            delay: Base wait in seconds, multiplied by the attempt number
                (default: config.pipeline.retry_delay)

        Returns:
            PipelineResult: Result of the last attempt, with ``attempts`` set
        """
        retries = self.config.pipeline.retries if retries is None else retries
        delay = self.config.pipeline.retry_delay if delay is None else delay

        attempt = 1
        while True:
            result = await self.run_once()
            result.attempts = attempt

            if result.success or result.failed_step != PipelineStep.FETCHING:
                return result
            if attempt > retries:
                logger.error("Pipeline failed after %d attempts", attempt)
                return result

            logger.warning(
                "Retrying pipeline (attempt %d/%d) in %.1fs",
                attempt + 1,
                retries + 1,
                delay * attempt,
            )
            await sleep(delay * attempt)
            attempt += 1


def create_pipeline(config: PipelineConfig) -> Pipeline:
    """Build a pipeline reading from the configured explorer and writing files.

    Args:
        config: Loaded pipeline configuration

    Returns:
        Pipeline: Network source plus filesystem writers
    """
    history_dir = config.output.history_dir
    return Pipeline(
        config,
        HashSourceClient(config.blockchain, config.retry),
        FileSystemWriter(config.output.public_dir),
        history_writer=FileSystemWriter(history_dir) if history_dir else None,
    )


__all__ = ["Pipeline", "create_pipeline", "merge_metadata"]
