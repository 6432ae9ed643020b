"""dotnet-runtime-installer - Standalone .NET Core shared runtime installation.

Public API exports.

Mechanism lives here; apps inject policy (install location, feeds) and, when
needed, their own downloader/extractor/filesystem implementations.
"""

from .archive import ArchiveExtractor
from .exceptions import InstallerError
from .exceptions import InstallVerificationError
from .exceptions import MalformedVersionError
from .exceptions import UnexpectedInstallError
from .exceptions import UnsupportedArchitectureError
from .exceptions import UnsupportedPlatformError
from .exceptions import UnsupportedRuntimeError
from .exceptions import UsageError
from .filesystem import LocalFileSystem
from .installer import RuntimeInstaller
from .installer import install_standalone
from .protocols import DownloaderProtocol
from .protocols import ExtractorProtocol
from .protocols import FileSystemProtocol
from .resolver import DistributionResolver
from .resolver import build_download_uri
from .resolver import build_install_path
from .resolver import resolve_asset_descriptor
from .schema import DEFAULT_CACHED_FEED
from .schema import DEFAULT_UNCACHED_FEED
from .schema import Architecture
from .schema import AssetDescriptor
from .schema import InstallOutcome
from .schema import InstallRequest
from .schema import Platform
from .schema import ResolvedVersion
from .schema import RuntimeKind
from .transport import HttpDownloader

__all__ = [
    # Data model
    "InstallRequest",
    "InstallOutcome",
    "ResolvedVersion",
    "AssetDescriptor",
    "Platform",
    "Architecture",
    "RuntimeKind",
    "DEFAULT_CACHED_FEED",
    "DEFAULT_UNCACHED_FEED",
    # Resolution
    "DistributionResolver",
    "resolve_asset_descriptor",
    "build_download_uri",
    "build_install_path",
    # Installation
    "RuntimeInstaller",
    "install_standalone",
    # Collaborators
    "DownloaderProtocol",
    "ExtractorProtocol",
    "FileSystemProtocol",
    "HttpDownloader",
    "ArchiveExtractor",
    "LocalFileSystem",
    # Exceptions
    "InstallerError",
    "MalformedVersionError",
    "UnsupportedRuntimeError",
    "UnsupportedPlatformError",
    "UnsupportedArchitectureError",
    "InstallVerificationError",
    "UnexpectedInstallError",
    "UsageError",
]

__version__ = "0.1.0"
