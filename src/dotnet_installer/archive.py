"""Archive extractor - ExtractorProtocol over zipfile/tarfile.

Distribution archives are .zip on Windows and .tar.gz elsewhere. Extraction is
blocking, so it runs in a worker thread to keep the event loop free.
"""

import asyncio
import logging
import tarfile
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


def _target_for(destination: Path, entry_name: str) -> Path:
    """Resolve an entry's output path, refusing paths that escape destination."""
    root = destination.resolve()
    target = (root / entry_name).resolve()
    if target != root and root not in target.parents:
        raise ValueError(f"Archive entry escapes destination: {entry_name}")
    return target


def _extract_zip(archive: Path, destination: Path, overwrite: bool) -> int:
    count = 0
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            target = _target_for(destination, info.filename)
            if target.exists() and not overwrite:
                logger.debug(f"Keeping existing file: {target}")
                continue
            zf.extract(info, destination)
            count += 1
    return count


def _extract_tar(archive: Path, destination: Path, overwrite: bool) -> int:
    count = 0
    with tarfile.open(archive, "r:*") as tf:
        for member in tf.getmembers():
            if member.isdir():
                continue
            target = _target_for(destination, member.name)
            if (target.exists() or target.is_symlink()) and not overwrite:
                logger.debug(f"Keeping existing file: {target}")
                continue
            tf.extract(member, destination, filter="data")
            count += 1
    return count


def extract_archive(archive: Path, destination: Path, overwrite: bool) -> int:
    """
    Expand every non-directory entry of archive into destination (blocking).

    Intermediate directories are created as needed. Without overwrite, files
    that already exist are left untouched.

    Args:
        archive: .zip, .tar.gz or .tgz file
        destination: Directory to expand into
        overwrite: Replace existing files

    Returns:
        Number of entries written

    Raises:
        ValueError: If the archive type is unknown or an entry escapes destination
    """
    destination.mkdir(parents=True, exist_ok=True)
    name = archive.name.lower()

    if name.endswith(".zip"):
        count = _extract_zip(archive, destination, overwrite)
    elif name.endswith((".tar.gz", ".tgz")):
        count = _extract_tar(archive, destination, overwrite)
    else:
        raise ValueError(f"Unsupported archive type: {archive.name}")

    logger.debug(f"Extracted {count} entries from {archive} into {destination}")
    return count


class ArchiveExtractor:
    """Default extractor: runs extract_archive off the event loop."""

    async def extract(self, archive: Path, destination: Path, overwrite: bool) -> None:
        await asyncio.to_thread(extract_archive, archive, destination, overwrite)
