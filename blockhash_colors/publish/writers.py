"""Output writers: the filesystem for cron runs, memory for previews and tests."""

from pathlib import Path

from blockhash_colors.helpers.logging import get_logger


logger = get_logger(__name__)


class FileSystemWriter:
    """Writes UTF-8 files into a target directory, replacing earlier ones."""

    def __init__(self, target_dir: str | Path) -> None:
        """Initialize the writer.

        Args:
            target_dir: Directory receiving the files; created on demand
        """
        self.target_dir = Path(target_dir)

    def ensure_target(self) -> None:
        """Create the target directory if it does not exist yet."""
        self.target_dir.mkdir(parents=True, exist_ok=True)

    def write(self, name: str, content: str) -> str:
        """Write ``content`` to ``target_dir / name`` and return the path."""
        path = self.target_dir / name
        path.write_text(content, encoding="utf-8")
        logger.info("Wrote %s", path)
        return str(path)


class InMemoryWriter:
    """Keeps rendered outputs in a dict keyed by file name."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}

    def ensure_target(self) -> None:
        """Nothing to prepare."""

    def write(self, name: str, content: str) -> str:
        """Store ``content`` under ``name`` and return a ``memory://`` location."""
        self.files[name] = content
        return f"memory://{name}"


__all__ = ["FileSystemWriter", "InMemoryWriter"]
