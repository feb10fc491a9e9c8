"""Output publisher.

Writes each enabled format independently through an :class:`OutputWriter`.
A failing format is recorded in the :class:`PublishResult` and the others
are still attempted; ``publish`` itself never raises.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from typing import TYPE_CHECKING

from blockhash_colors.helpers.config import OutputConfig
from blockhash_colors.helpers.constants import CSS_FILENAME, HTML_FILENAME, JSON_FILENAME
from blockhash_colors.helpers.logging import get_logger
from blockhash_colors.publish.models import OutputType, PublishResult
from blockhash_colors.publish.render import render_css, render_html, render_json
from blockhash_colors.publish.writers import FileSystemWriter


if TYPE_CHECKING:
    from collections.abc import Callable

    from blockhash_colors.palette.models import Palette
    from blockhash_colors.protocols import OutputWriter


logger = get_logger(__name__)


def history_filename(moment: datetime) -> str:
    """Name of the timestamped JSON copy kept in the history directory.

    Microsecond resolution keeps runs in the same second apart.

    Example:
        >>> history_filename(datetime(2024, 5, 6, 7, 8, 9, 250000, tzinfo=UTC))
        'colors-20240506T070809.250000Z.json'
    """
    return f"colors-{moment.astimezone(UTC):%Y%m%dT%H%M%S.%fZ}.json"


class Publisher:
    """Renders a palette and hands every format to a writer."""

    def __init__(
        self,
        writer: OutputWriter,
        output_config: OutputConfig | None = None,
        history_writer: OutputWriter | None = None,
    ) -> None:
        """Initialize the publisher.

        Args:
            writer: Destination of colors.css, colors.json and colors-preview.html
            output_config: Format toggles; all formats enabled when omitted
            history_writer: Optional destination of timestamped JSON copies
        """
        self.writer = writer
        self.output_config = output_config or OutputConfig()
        self.history_writer = history_writer

    def _write(
        self,
        result: PublishResult,
        writer: OutputWriter,
        output_type: OutputType,
        name: str,
        render: Callable[[], str],
    ) -> None:
        try:
            path = writer.write(name, render())
        except Exception as e:
            logger.error("Failed to write %s output %s: %s", output_type, name, e)
            result.record_error(f"Failed to write {output_type.upper()}: {e}")
        else:
            result.record_output(output_type, path)

    def publish(self, palette: Palette) -> PublishResult:
        """Write every enabled format for ``palette``.

        Args:
            palette: Derived palette

        Returns:
            PublishResult: Written outputs and per-format errors
        """
        result = PublishResult()
        generated_at = datetime.now(UTC)

        try:
            self.writer.ensure_target()
        except Exception as e:
            # Writes below fail individually and are reported one by one
            logger.error("Failed to prepare output target: %s", e)

        config = self.output_config
        if config.css:
            self._write(
                result,
                self.writer,
                "css",
                CSS_FILENAME,
                lambda: render_css(palette, generated_at),
            )
        if config.json_output:
            self._write(
                result,
                self.writer,
                "json",
                JSON_FILENAME,
                lambda: render_json(palette, generated_at),
            )
        if config.html:
            self._write(
                result, self.writer, "html", HTML_FILENAME, lambda: render_html(palette)
            )

        if self.history_writer is not None:
            try:
                self.history_writer.ensure_target()
            except Exception as e:
                logger.error("Failed to prepare history target: %s", e)
            self._write(
                result,
                self.history_writer,
                "history",
                history_filename(generated_at),
                lambda: render_json(palette, generated_at),
            )

        if result.success:
            logger.info("Published %d outputs", len(result.outputs))
        else:
            logger.warning(
                "Published %d outputs with %d errors",
                len(result.outputs),
                len(result.errors),
            )
        return result


def publish(palette: Palette, target_dir: str | Path) -> PublishResult:
    """Write colors.css, colors.json and colors-preview.html into ``target_dir``.

    Example:
        ```python
        from blockhash_colors.palette.derive import derive
        from blockhash_colors.publish.publisher import publish

        result = publish(derive("00ab"), "public")
        print([output.path for output in result.outputs])
        ```
    """
    return Publisher(FileSystemWriter(target_dir)).publish(palette)


__all__ = ["Publisher", "history_filename", "publish"]
