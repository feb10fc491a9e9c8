"""Command-line entry point, meant to be run from cron.

Examples:
  # Fetch the latest block and publish colors.css/json/html
  python -m blockhash_colors.cli run

  # Hourly cron job appending to logs/cron.log
  0 * * * * cd /srv/blockhash && blockhash-colors run --log-file logs/cron.log

  # Derive a palette from a known hash without touching the network
  python -m blockhash_colors.cli derive 00000000000000000001d4ae --format css
"""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from blockhash_colors.exceptions import ConfigError
from blockhash_colors.helpers.config import OutputConfig, get_optional_env, load_config
from blockhash_colors.helpers.constants import CSS_FILENAME, HTML_FILENAME, JSON_FILENAME
from blockhash_colors.helpers.logging import LOG_LEVELS, configure_logging, get_logger
from blockhash_colors.pipeline.models import PipelineResult
from blockhash_colors.pipeline.orchestrator import Pipeline, create_pipeline
from blockhash_colors.publish.writers import InMemoryWriter
from blockhash_colors.source.client import HashSourceClient
from blockhash_colors.source.static import StaticHashSource


logger = get_logger(__name__)

console = Console()

FORMAT_FILES = {"css": CSS_FILENAME, "json": JSON_FILENAME, "html": HTML_FILENAME}


def render_summary(result: PipelineResult) -> Table:
    """Build a table of the derived palette for terminal output."""
    table = Table(title=f"Block {result.hash or 'N/A'}")
    table.add_column("#", justify="right")
    table.add_column("Swatch")
    table.add_column("Hex")
    table.add_column("CSS")

    rows = []
    if result.primary:
        rows.append(("primary", result.primary.hex, result.primary.css))
    if result.accent:
        rows.append(("accent", result.accent.hex, result.accent.css))
    for index, hex_value in enumerate(result.colors, start=1):
        rows.append((str(index), hex_value, ""))

    for label, hex_value, css in rows:
        table.add_row(label, f"[on {hex_value}]      [/]", hex_value, css)
    return table


def report(result: PipelineResult) -> int:
    """Print the outcome of a run and map it to an exit code."""
    if not result.success:
        failed_at = result.failed_step or result.step
        console.print(
            f"[red]Pipeline failed at {failed_at.value} "
            f"after {result.duration_ms:.0f}ms[/red]"
        )
        for error in result.errors:
            console.print(f"  [red]-[/red] {escape(error)}", highlight=False)
        return 1

    console.print(render_summary(result))
    for output in result.outputs:
        console.print(f"  {output.type}: {output.path}", highlight=False)
    console.print(f"[green]Completed in {result.duration_ms:.0f}ms[/green]")
    return 0


async def run_command(args: argparse.Namespace) -> int:
    """Fetch the latest block, derive its palette and publish it."""
    config = load_config(args.config)
    if args.output_dir:
        config = config.model_copy(
            update={
                "output": config.output.model_copy(
                    update={"public_dir": args.output_dir}
                )
            }
        )

    if args.dry_run:
        writer = InMemoryWriter()
        pipeline = Pipeline(
            config, HashSourceClient(config.blockchain, config.retry), writer
        )
    else:
        writer = None
        pipeline = create_pipeline(config)

    result = await pipeline.run_with_retries(retries=args.retries)
    exit_code = report(result)

    if writer is not None and CSS_FILENAME in writer.files:
        print(writer.files[CSS_FILENAME])
    return exit_code


async def derive_command(args: argparse.Namespace) -> int:
    """Derive a palette from a hash given on the command line."""
    config = load_config(args.config)
    config = config.model_copy(update={"output": OutputConfig()})

    writer = InMemoryWriter()
    result = await Pipeline(config, StaticHashSource(args.hash), writer).run_once()

    if args.format == "table" or not result.success:
        return report(result)

    print(writer.files[FORMAT_FILES[args.format]])
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="blockhash-colors",
        description="Derive accent colors from the latest blockchain block hash",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        help="Path of the JSON config (default: $BLOCKHASH_CONFIG or inputs/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(LOG_LEVELS),
        default=(get_optional_env("BLOCKHASH_LOG_LEVEL") or "INFO").upper(),
        help="Logging level (default: $BLOCKHASH_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=get_optional_env("BLOCKHASH_LOG_FILE"),
        help="Also append log records to this file (default: $BLOCKHASH_LOG_FILE)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the full pipeline once")
    run_parser.add_argument("--output-dir", help="Override output.publicDir")
    run_parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Whole-pipeline re-runs when fetching fails (default: pipeline.retries)",
    )
    run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Keep outputs in memory and print the CSS instead of writing files",
    )

    derive_parser = subparsers.add_parser(
        "derive", help="Derive a palette from a given hash, offline"
    )
    derive_parser.add_argument("hash", help="Hex block hash")
    derive_parser.add_argument(
        "--format",
        choices=["table", *FORMAT_FILES],
        default="table",
        help="Output format (default: table)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the selected command and return its exit code.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args(argv)
    command = run_command if args.command == "run" else derive_command

    try:
        configure_logging(args.log_level, args.log_file)
    except ValueError as e:
        # Only an invalid $BLOCKHASH_LOG_LEVEL gets past argparse choices
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}", highlight=False)
        return 1

    try:
        return asyncio.run(command(args))
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}", highlight=False)
        return 1
    except Exception as e:
        logger.exception("Fatal error")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", highlight=False)
        return 1


def cli() -> None:
    """Command-line interface entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
