"""Standalone runtime installation (protocol-based orchestration).

The installer decides WHAT to do; injected collaborators decide HOW bytes move:
- DownloaderProtocol fetches archives and latest.version pointers
- ExtractorProtocol expands archives
- FileSystemProtocol answers existence questions and owns temp files

Pipeline per request:
    check existing -> resolve version -> check exact -> download -> extract
    -> verify -> delete temp archive
"""

import logging

from .archive import ArchiveExtractor
from .exceptions import InstallerError
from .exceptions import InstallVerificationError
from .exceptions import UnexpectedInstallError
from .filesystem import LocalFileSystem
from .protocols import DownloaderProtocol
from .protocols import ExtractorProtocol
from .protocols import FileSystemProtocol
from .resolver import DistributionResolver
from .resolver import package_root
from .resolver import split_version
from .schema import InstallOutcome
from .schema import InstallRequest
from .transport import HttpDownloader

logger = logging.getLogger(__name__)


def _report(request: InstallRequest, message: str) -> None:
    """Send a progress message to the logger and the request's sink."""
    logger.info(message)
    if request.log is not None:
        request.log(message)


class RuntimeInstaller:
    """
    Install shared runtimes into a directory tree (with injected collaborators).

    Concurrent calls are independent; calls targeting the same install path are
    not coordinated.
    """

    def __init__(
        self,
        downloader: DownloaderProtocol | None = None,
        extractor: ExtractorProtocol | None = None,
        filesystem: FileSystemProtocol | None = None,
    ):
        """Initialize installer, defaulting to real HTTP, archive and disk access.

        Args:
            downloader: Fetches URLs to files (default: HttpDownloader)
            extractor: Expands archives (default: ArchiveExtractor)
            filesystem: Filesystem capabilities (default: LocalFileSystem)
        """
        self.downloader = downloader or HttpDownloader()
        self.extractor = extractor or ArchiveExtractor()
        self.filesystem = filesystem or LocalFileSystem()
        self.resolver = DistributionResolver(self.downloader, self.filesystem)

    async def install_standalone(self, request: InstallRequest) -> InstallOutcome:
        """
        Install the requested runtime unless an equivalent version is present.

        Process:
        1. Skip if a directory prefixed by the requested version exists (no network)
        2. Resolve the concrete version ("2.1" -> latest 2.1.x)
        3. Skip if the exact version directory exists
        4. Download the archive to a temp file
        5. Extract into install_dir
        6. Verify the version directory now exists
        7. Delete the temp archive

        Args:
            request: What to install and where

        Returns:
            InstallOutcome.SKIPPED or InstallOutcome.INSTALLED

        Raises:
            InstallerError: On any failure. Domain failures (malformed version,
                unsupported platform/runtime, verification) are raised as-is;
                everything else is wrapped in UnexpectedInstallError with the
                original exception as __cause__.

        Example:
            >>> installer = RuntimeInstaller()
            >>> request = InstallRequest(
            ...     install_dir=Path("./dotnet"), platform="linux", architecture="x64", version="2.1"
            ... )
            >>> await installer.install_standalone(request)
            <InstallOutcome.INSTALLED: 'installed'>
        """
        try:
            descriptor = self.resolver.resolve_asset_descriptor(request.runtime, request.platform)
            root = package_root(request.install_dir, descriptor)
            split_version(request.version)

            # Cheap check first: "2.1" is satisfied by an existing "2.1.6" without asking the feed
            if not request.force and self.filesystem.directory_exists(root):
                matches = sorted(self.filesystem.list_subdirectories(root, request.version))
                if matches:
                    _report(
                        request,
                        f"Skipping installation: {descriptor.name} version {matches[0]} is already installed.",
                    )
                    return InstallOutcome.SKIPPED

            resolved = await self.resolver.resolve_version(request)
            version = resolved.version
            uri = self.resolver.build_download_uri(request, request.feed, version)
            install_path = self.resolver.build_install_path(request.install_dir, descriptor, version)

            if not request.force and self.filesystem.directory_exists(install_path):
                _report(
                    request,
                    f"Skipping installation: {descriptor.name} version {version} is already installed.",
                )
                return InstallOutcome.SKIPPED

            _report(
                request,
                f"Installing {descriptor.name} {request.platform}-{request.architecture} "
                f"v{version} to {request.install_dir}...",
            )

            self.filesystem.create_directory(request.install_dir)

            temp_path = self.filesystem.temp_file_path()
            archive_path = temp_path.with_name(f"{temp_path.name}.{descriptor.archive_extension}")
            logger.debug(f"Downloading {uri} to {archive_path}")
            await self.downloader.download(uri, archive_path)

            logger.debug(f"Extracting {archive_path} into {request.install_dir}")
            await self.extractor.extract(archive_path, request.install_dir, request.force)

            if not self.filesystem.directory_exists(install_path):
                raise InstallVerificationError(
                    f"{descriptor.name} version {version} failed to install with an unknown error.",
                    context={"install_path": str(install_path), "uri": uri},
                )

            self.filesystem.delete_file(archive_path)

            _report(request, "Installation complete.")
            return InstallOutcome.INSTALLED

        except Exception as e:
            if isinstance(e, InstallerError):
                raise
            raise UnexpectedInstallError(f"Unexpected error during installation: {e}") from e


async def install_standalone(request: InstallRequest, installer: RuntimeInstaller | None = None) -> InstallOutcome:
    """
    Install a standalone shared runtime (convenience wrapper).

    Args:
        request: What to install and where
        installer: Optional preconfigured installer (default: real HTTP/disk)

    Returns:
        InstallOutcome of the run

    Raises:
        InstallerError: If installation fails at any step
    """
    installer = installer or RuntimeInstaller()
    return await installer.install_standalone(request)
