"""Local filesystem implementation of FileSystemProtocol."""

import logging
import tempfile
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """Real disk access via pathlib."""

    def __init__(self, temp_dir: Path | None = None):
        """Initialize with an optional temp directory (default: system temp dir)."""
        self.temp_dir = temp_dir

    def directory_exists(self, path: Path) -> bool:
        return path.is_dir()

    def list_subdirectories(self, path: Path, prefix: str) -> list[str]:
        return [item.name for item in path.iterdir() if item.is_dir() and item.name.startswith(prefix)]

    def create_directory(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def delete_file(self, path: Path) -> None:
        path.unlink(missing_ok=True)
        logger.debug(f"Deleted {path}")

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def temp_file_path(self) -> Path:
        """Unique path in the temp directory (the file is not created)."""
        base = self.temp_dir or Path(tempfile.gettempdir())
        return base / f"dotnet-install-{uuid.uuid4().hex}"
