"""Distribution resolver - Map install requests to versions, URLs and paths.

Everything here is pure except resolve_version(), which performs one download
of the series' latest.version pointer when asked for "major.minor".

Feed layout:
    {feed}/Runtime/{version}/dotnet-runtime-{version}-{platform}-{arch}.{ext}
    {feed}/aspnetcore/Runtime/{version}/aspnetcore-runtime-{version}-{platform}-{arch}.{ext}
    {uncached_feed}/{runtime_segment}/{series}/latest.version
"""

import logging
from pathlib import Path

from .exceptions import MalformedVersionError
from .exceptions import UnsupportedPlatformError
from .exceptions import UnsupportedRuntimeError
from .protocols import DownloaderProtocol
from .protocols import FileSystemProtocol
from .schema import AssetDescriptor
from .schema import InstallRequest
from .schema import Platform
from .schema import ResolvedVersion
from .schema import RuntimeKind

logger = logging.getLogger(__name__)

# name, install subdirectory, feed segment, archive file prefix
_RUNTIME_ASSETS: dict[RuntimeKind, tuple[str, Path, str, str]] = {
    RuntimeKind.CORE: (
        ".NET Core Runtime",
        Path("shared") / "Microsoft.NETCore.App",
        "Runtime",
        "dotnet-runtime",
    ),
    RuntimeKind.WEB: (
        "ASP.NET Core Runtime",
        Path("shared") / "Microsoft.AspNetCore.App",
        "aspnetcore/Runtime",
        "aspnetcore-runtime",
    ),
}

_ARCHIVE_EXTENSIONS: dict[Platform, str] = {
    Platform.WINDOWS: "zip",
    Platform.MACOS: "tar.gz",
    Platform.LINUX: "tar.gz",
}


def split_version(version: str) -> list[str]:
    """Split a requested version into its 2 or 3 dot-separated components.

    Args:
        version: Requested version string ("2.1" or "2.1.4")

    Returns:
        The non-empty components

    Raises:
        MalformedVersionError: If there are not exactly 2 or 3 non-empty components

    Example:
        >>> split_version("2.1")
        ['2', '1']
        >>> split_version("2.")
        Traceback (most recent call last):
        ...
        MalformedVersionError: Invalid version '2.' ...
    """
    parts = version.split(".")
    if len(parts) not in (2, 3) or not all(parts):
        raise MalformedVersionError(
            f"Invalid version '{version}': expected a version like 2.1 or 2.1.4",
            context={"version": version},
        )
    return parts


def resolve_asset_descriptor(runtime: RuntimeKind, platform: Platform) -> AssetDescriptor:
    """Naming facts for a runtime kind on a platform.

    Raises:
        UnsupportedRuntimeError: If runtime has no known asset
        UnsupportedPlatformError: If platform has no archive format (e.g. android)
    """
    if runtime not in _RUNTIME_ASSETS:
        raise UnsupportedRuntimeError(f"Unhandled runtime: {runtime}", context={"runtime": str(runtime)})
    if platform not in _ARCHIVE_EXTENSIONS:
        raise UnsupportedPlatformError(
            f"Unhandled platform: {platform} (no distribution archive format)",
            context={"platform": str(platform)},
        )

    name, relative_path, runtime_segment, file_prefix = _RUNTIME_ASSETS[runtime]
    return AssetDescriptor(
        name=name,
        relative_path=relative_path,
        archive_extension=_ARCHIVE_EXTENSIONS[platform],
        runtime_segment=runtime_segment,
        file_prefix=file_prefix,
    )


def package_root(install_dir: Path, descriptor: AssetDescriptor) -> Path:
    """Directory holding every installed version of an asset."""
    return install_dir / descriptor.relative_path


def build_install_path(install_dir: Path, descriptor: AssetDescriptor, version: str) -> Path:
    """Directory a concrete version is installed into."""
    return package_root(install_dir, descriptor) / version


def build_download_uri(request: InstallRequest, feed: str, version: str) -> str:
    """Deterministic archive URL for a concrete version.

    Example:
        >>> build_download_uri(request, "https://feed/dotnet", "2.1.4")
        'https://feed/dotnet/Runtime/2.1.4/dotnet-runtime-2.1.4-win-x64.zip'
    """
    descriptor = resolve_asset_descriptor(request.runtime, request.platform)
    path = descriptor.download_path(version, request.platform, request.architecture)
    return f"{feed.rstrip('/')}/{path}"


def build_latest_version_uri(request: InstallRequest, series: str) -> str:
    """URL of the latest.version pointer for a "major.minor" series (uncached feed)."""
    descriptor = resolve_asset_descriptor(request.runtime, request.platform)
    return f"{request.uncached_feed.rstrip('/')}/{descriptor.latest_version_path(series)}"


class DistributionResolver:
    """
    Resolve requested versions to concrete ones (with injected I/O).

    Only series requests ("2.1") touch the network: the uncached feed publishes a
    latest.version file holding "<commit-hash> <version>".
    """

    def __init__(self, downloader: DownloaderProtocol, filesystem: FileSystemProtocol):
        """Initialize resolver with app-provided collaborators.

        Args:
            downloader: Used to fetch latest.version pointers
            filesystem: Used for the temporary pointer file
        """
        self.downloader = downloader
        self.filesystem = filesystem

    def resolve_asset_descriptor(self, runtime: RuntimeKind, platform: Platform) -> AssetDescriptor:
        return resolve_asset_descriptor(runtime, platform)

    def build_download_uri(self, request: InstallRequest, feed: str, version: str) -> str:
        return build_download_uri(request, feed, version)

    def build_install_path(self, install_dir: Path, descriptor: AssetDescriptor, version: str) -> Path:
        return build_install_path(install_dir, descriptor, version)

    async def resolve_version(self, request: InstallRequest) -> ResolvedVersion:
        """
        Resolve the requested version to a concrete "major.minor.patch".

        Resolution:
        1. "major.minor.patch" - returned as-is, no network call
        2. "major.minor" - latest.version fetched from the uncached feed

        Args:
            request: Install request carrying version, runtime and feeds

        Returns:
            ResolvedVersion (commit set only for series lookups)

        Raises:
            MalformedVersionError: If the version has neither 2 nor 3 components
            ValueError: If the latest.version file is malformed
        """
        parts = split_version(request.version)
        if len(parts) == 3:
            return ResolvedVersion(version=request.version)

        uri = build_latest_version_uri(request, request.version)
        pointer_path = self.filesystem.temp_file_path()

        logger.debug(f"Fetching latest version pointer: {uri}")
        await self.downloader.download(uri, pointer_path)
        content = self.filesystem.read_text(pointer_path)
        self.filesystem.delete_file(pointer_path)

        tokens = content.split()
        if len(tokens) < 2:
            raise ValueError(f"Malformed latest.version file at {uri}: {content!r}")

        commit, version = tokens[0], tokens[1]
        message = f"Latest version in the {request.version} series is {version} (commit {commit})."
        logger.info(message)
        if request.log is not None:
            request.log(message)

        return ResolvedVersion(version=version, commit=commit)
