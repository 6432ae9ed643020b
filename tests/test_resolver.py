"""Tests for DistributionResolver and URL/path construction."""

from pathlib import Path

import pytest
from dotnet_installer import DEFAULT_UNCACHED_FEED
from dotnet_installer import DistributionResolver
from dotnet_installer import InstallRequest
from dotnet_installer import MalformedVersionError
from dotnet_installer import Platform
from dotnet_installer import RuntimeKind
from dotnet_installer import UnsupportedPlatformError
from dotnet_installer import UnsupportedRuntimeError
from dotnet_installer import build_download_uri
from dotnet_installer import build_install_path
from dotnet_installer import resolve_asset_descriptor
from dotnet_installer.resolver import build_latest_version_uri
from dotnet_installer.resolver import split_version

FEED = "https://feed.example/dotnet"


class PointerDownloader:
    """Serves a fixed latest.version body into a dict-backed filesystem."""

    def __init__(self, files: dict[Path, str], body: str):
        self.files = files
        self.body = body
        self.calls: list[tuple[str, Path]] = []

    async def download(self, uri: str, destination: Path) -> None:
        self.calls.append((uri, destination))
        self.files[destination] = self.body


class DictFileSystem:
    """Just enough filesystem for version resolution."""

    def __init__(self):
        self.files: dict[Path, str] = {}
        self.deleted: list[Path] = []

    def read_text(self, path: Path) -> str:
        return self.files[path]

    def delete_file(self, path: Path) -> None:
        self.deleted.append(path)
        del self.files[path]

    def temp_file_path(self) -> Path:
        return Path("/tmp/latest-pointer")


def make_request(version: str, **overrides) -> InstallRequest:
    params = {"install_dir": Path("/opt/dotnet"), "platform": "win", "architecture": "x64", "version": version}
    params.update(overrides)
    return InstallRequest(**params)


def make_resolver(body: str = "abc123def 2.1.6"):
    fs = DictFileSystem()
    downloader = PointerDownloader(fs.files, body)
    return DistributionResolver(downloader, fs), downloader, fs


@pytest.mark.parametrize("version,expected", [("2.1", ["2", "1"]), ("2.1.4", ["2", "1", "4"]), ("a.b.c", ["a", "b", "c"])])
def test_split_version_accepts_two_or_three_components(version, expected):
    """Test well-formed versions split into components."""
    assert split_version(version) == expected


@pytest.mark.parametrize("version", ["", "2", "2.", ".2", "2..1", "2.1.", "2.3.2.1", "bob"])
def test_split_version_rejects_other_shapes(version):
    """Test malformed versions raise with the original string in the message."""
    with pytest.raises(MalformedVersionError, match="version") as exc_info:
        split_version(version)

    assert f"'{version}'" in str(exc_info.value)
    assert exc_info.value.context == {"version": version}


def test_asset_descriptor_core_runtime_windows():
    """Test core runtime naming facts on Windows."""
    descriptor = resolve_asset_descriptor(RuntimeKind.CORE, Platform.WINDOWS)

    assert descriptor.name == ".NET Core Runtime"
    assert descriptor.relative_path == Path("shared") / "Microsoft.NETCore.App"
    assert descriptor.archive_extension == "zip"
    assert descriptor.latest_version_path("2.1") == "Runtime/2.1/latest.version"


@pytest.mark.parametrize("platform", [Platform.LINUX, Platform.MACOS])
def test_asset_descriptor_web_runtime_unix(platform):
    """Test web runtime naming facts on Linux and MacOS."""
    descriptor = resolve_asset_descriptor(RuntimeKind.WEB, platform)

    assert descriptor.name == "ASP.NET Core Runtime"
    assert descriptor.relative_path == Path("shared") / "Microsoft.AspNetCore.App"
    assert descriptor.archive_extension == "tar.gz"
    assert descriptor.latest_version_path("2.1") == "aspnetcore/Runtime/2.1/latest.version"


def test_asset_descriptor_rejects_android():
    """Test android has no archive format."""
    with pytest.raises(UnsupportedPlatformError, match="android"):
        resolve_asset_descriptor(RuntimeKind.CORE, Platform.ANDROID)


def test_asset_descriptor_rejects_unknown_runtime():
    """Test values outside the enumeration are not silently mapped."""
    with pytest.raises(UnsupportedRuntimeError):
        resolve_asset_descriptor("mono", Platform.WINDOWS)  # type: ignore[arg-type]


def test_download_uri_core_runtime_windows():
    """Test exact URL for the core runtime on win-x64."""
    request = make_request("2.1.4")

    assert build_download_uri(request, FEED, "2.1.4") == f"{FEED}/Runtime/2.1.4/dotnet-runtime-2.1.4-win-x64.zip"


def test_download_uri_web_runtime_linux():
    """Test exact URL for the web runtime on linux-x64."""
    request = make_request("2.1.4", platform="linux", runtime="aspnet")

    assert build_download_uri(request, FEED, "2.1.4") == (
        f"{FEED}/aspnetcore/Runtime/2.1.4/aspnetcore-runtime-2.1.4-linux-x64.tar.gz"
    )


def test_download_uri_ignores_trailing_slash_on_feed():
    """Test feed with trailing slash produces the same URL."""
    request = make_request("2.1.4")

    assert build_download_uri(request, FEED + "/", "2.1.4") == build_download_uri(request, FEED, "2.1.4")


def test_latest_version_uri_uses_uncached_feed():
    """Test latest.version pointer comes from the uncached feed."""
    request = make_request("2.1", runtime="aspnet")

    assert build_latest_version_uri(request, "2.1") == f"{DEFAULT_UNCACHED_FEED}/aspnetcore/Runtime/2.1/latest.version"


def test_install_path():
    """Test install path is install_dir / relative asset path / version."""
    descriptor = resolve_asset_descriptor(RuntimeKind.CORE, Platform.LINUX)

    path = build_install_path(Path("/opt/dotnet"), descriptor, "2.1.4")

    assert path == Path("/opt/dotnet/shared/Microsoft.NETCore.App/2.1.4")


@pytest.mark.asyncio
async def test_resolve_exact_version_without_network():
    """Test 3-component versions are returned unchanged."""
    resolver, downloader, fs = make_resolver()

    resolved = await resolver.resolve_version(make_request("2.1.4"))

    assert resolved.version == "2.1.4"
    assert resolved.commit is None
    assert downloader.calls == []


@pytest.mark.asyncio
async def test_resolve_series_fetches_latest_version():
    """Test 2-component versions fetch latest.version once and use its second token."""
    resolver, downloader, fs = make_resolver(body="abc123def\n2.1.6\n")
    messages: list[str] = []

    resolved = await resolver.resolve_version(make_request("2.1", uncached_feed=FEED, log=messages.append))

    assert resolved.version == "2.1.6"
    assert resolved.commit == "abc123def"
    assert downloader.calls == [(f"{FEED}/Runtime/2.1/latest.version", Path("/tmp/latest-pointer"))]
    assert fs.deleted == [Path("/tmp/latest-pointer")]
    assert messages == ["Latest version in the 2.1 series is 2.1.6 (commit abc123def)."]


@pytest.mark.asyncio
async def test_resolve_series_rejects_short_pointer():
    """Test a latest.version file without a version token."""
    resolver, downloader, fs = make_resolver(body="abc123def")

    with pytest.raises(ValueError, match="latest.version"):
        await resolver.resolve_version(make_request("2.1"))


@pytest.mark.asyncio
async def test_resolve_malformed_version():
    """Test resolution refuses malformed versions before any download."""
    resolver, downloader, fs = make_resolver()

    with pytest.raises(MalformedVersionError):
        await resolver.resolve_version(make_request("2.3.2.1"))

    assert downloader.calls == []
