"""Protocols for the installer's I/O collaborators.

The installer never touches the network, archives or disk directly. Apps (and
tests) inject implementations of these protocols; transport.py, archive.py and
filesystem.py hold the defaults.
"""

from pathlib import Path
from typing import Protocol


class DownloaderProtocol(Protocol):
    """Fetches a URL to a local file."""

    async def download(self, uri: str, destination: Path) -> None:
        """Write the complete response body to destination.

        Args:
            uri: Absolute URL to fetch
            destination: File to create or overwrite

        Raises:
            Exception: If the transfer fails (must not be swallowed)
        """
        ...


class ExtractorProtocol(Protocol):
    """Expands an archive into a directory."""

    async def extract(self, archive: Path, destination: Path, overwrite: bool) -> None:
        """Expand every non-directory entry of archive into destination.

        Args:
            archive: Path to the downloaded archive
            destination: Directory to expand into (intermediate dirs are created)
            overwrite: Replace files that already exist at the destination

        Raises:
            Exception: If the archive cannot be read or written out
        """
        ...


class FileSystemProtocol(Protocol):
    """Filesystem capabilities needed by the resolver and installer."""

    def directory_exists(self, path: Path) -> bool: ...

    def list_subdirectories(self, path: Path, prefix: str) -> list[str]:
        """Names of immediate subdirectories of path starting with prefix."""
        ...

    def create_directory(self, path: Path) -> None:
        """Create path and any missing parents (no error if present)."""
        ...

    def delete_file(self, path: Path) -> None: ...

    def read_text(self, path: Path) -> str: ...

    def temp_file_path(self) -> Path:
        """Fresh, unique temporary file path."""
        ...
