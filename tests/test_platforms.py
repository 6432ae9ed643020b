"""Tests for platform/architecture detection."""

import pytest
from dotnet_installer import Architecture
from dotnet_installer import Platform
from dotnet_installer import UsageError
from dotnet_installer.platforms import detect_architecture
from dotnet_installer.platforms import detect_platform


@pytest.mark.parametrize(
    "system,expected",
    [("Windows", Platform.WINDOWS), ("Darwin", Platform.MACOS), ("Linux", Platform.LINUX)],
)
def test_detect_platform(system, expected):
    assert detect_platform(system) is expected


def test_detect_platform_unsupported():
    with pytest.raises(UsageError, match="FreeBSD"):
        detect_platform("FreeBSD")


@pytest.mark.parametrize(
    "machine,expected",
    [
        ("x86_64", Architecture.X64),
        ("AMD64", Architecture.X64),
        ("arm64", Architecture.X64),
        ("aarch64", Architecture.X64),
        ("i686", Architecture.X86),
        ("x86", Architecture.X86),
    ],
)
def test_detect_architecture(machine, expected):
    assert detect_architecture(machine) is expected


def test_detect_architecture_unsupported():
    with pytest.raises(UsageError, match="riscv64"):
        detect_architecture("riscv64")


def test_detect_current_host():
    """Test detection works for the machine running the tests."""
    try:
        detect_platform()
        detect_architecture()
    except UsageError:
        pytest.skip("Host platform has no runtime distribution")
