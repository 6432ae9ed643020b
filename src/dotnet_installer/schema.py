"""Installer data model - requests, resolved versions, asset descriptors.

Platform, architecture and runtime values arrive as free-form strings (CLI flags,
caller code). They are normalized to closed enumerations when an InstallRequest
is built, so every later decision works on validated values.
"""

from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator

from .exceptions import UnsupportedArchitectureError
from .exceptions import UnsupportedPlatformError
from .exceptions import UnsupportedRuntimeError

DEFAULT_CACHED_FEED = "https://dotnetcli.azureedge.net/dotnet"
DEFAULT_UNCACHED_FEED = "https://dotnetcli.blob.core.windows.net/dotnet"

LogSink = Callable[[str], None]


class Platform(StrEnum):
    """Target operating system, as spelled in distribution file names."""

    WINDOWS = "win"
    LINUX = "linux"
    MACOS = "osx"
    ANDROID = "android"

    @classmethod
    def parse(cls, value: "str | Platform") -> "Platform":
        """Case-normalize and validate a platform identifier.

        Raises:
            UnsupportedPlatformError: If value is not a known platform
        """
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedPlatformError(
                f"Unsupported platform: {value!r}", context={"platform": str(value)}
            ) from None


class Architecture(StrEnum):
    """Target CPU architecture."""

    X64 = "x64"
    X86 = "x86"

    @classmethod
    def parse(cls, value: "str | Architecture") -> "Architecture":
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedArchitectureError(
                f"Unsupported architecture: {value!r}", context={"architecture": str(value)}
            ) from None


class RuntimeKind(StrEnum):
    """Which shared runtime to install (values match the CLI --runtime flag)."""

    CORE = "dotnet"
    WEB = "aspnet"

    @classmethod
    def parse(cls, value: "str | RuntimeKind") -> "RuntimeKind":
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedRuntimeError(
                f"Unsupported runtime: {value!r}", context={"runtime": str(value)}
            ) from None


class InstallOutcome(StrEnum):
    """Terminal state of a successful install_standalone call."""

    SKIPPED = "skipped"
    INSTALLED = "installed"


class InstallRequest(BaseModel):
    """
    Parameters for one standalone runtime installation (immutable).

    The version may be exact ("2.1.4") or a series ("2.1"), which resolves to the
    latest published patch. Its shape is checked at resolution time, not here.

    Example:
        >>> request = InstallRequest(
        ...     install_dir=Path("/opt/dotnet"),
        ...     platform="Linux",
        ...     architecture="x64",
        ...     version="2.1",
        ...     runtime="aspnet",
        ...     log=print,
        ... )
        >>> request.platform
        <Platform.LINUX: 'linux'>
    """

    model_config = ConfigDict(frozen=True)

    install_dir: Path
    platform: Platform
    architecture: Architecture
    version: str
    runtime: RuntimeKind = RuntimeKind.CORE

    # Feeds: cached (CDN) serves archives, uncached serves latest.version pointers
    feed: str = DEFAULT_CACHED_FEED
    uncached_feed: str = DEFAULT_UNCACHED_FEED

    force: bool = False
    log: LogSink | None = None

    @field_validator("platform", mode="before")
    @classmethod
    def _normalize_platform(cls, value: object) -> Platform:
        return Platform.parse(value)  # type: ignore[arg-type]

    @field_validator("architecture", mode="before")
    @classmethod
    def _normalize_architecture(cls, value: object) -> Architecture:
        return Architecture.parse(value)  # type: ignore[arg-type]

    @field_validator("runtime", mode="before")
    @classmethod
    def _normalize_runtime(cls, value: object) -> RuntimeKind:
        return RuntimeKind.parse(value)  # type: ignore[arg-type]


class ResolvedVersion(BaseModel):
    """Concrete 3-component version, with the commit hash when looked up from a series."""

    model_config = ConfigDict(frozen=True)

    version: str
    commit: str | None = None


class AssetDescriptor(BaseModel):
    """
    Naming facts for one runtime kind on one platform.

    Pure derived data: recomputed from the request by DistributionResolver,
    never persisted.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    relative_path: Path
    archive_extension: str
    runtime_segment: str
    file_prefix: str

    def download_path(self, version: str, platform: Platform, architecture: Architecture) -> str:
        """Feed-relative path of the versioned archive."""
        file_name = f"{self.file_prefix}-{version}-{platform}-{architecture}.{self.archive_extension}"
        return f"{self.runtime_segment}/{version}/{file_name}"

    def latest_version_path(self, series: str) -> str:
        """Feed-relative path of the latest.version pointer for a series."""
        return f"{self.runtime_segment}/{series}/latest.version"
