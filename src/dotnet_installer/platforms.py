"""Detect the current platform and architecture for CLI defaults."""

import platform as _platform

from .exceptions import UsageError
from .schema import Architecture
from .schema import Platform


def detect_platform(system: str | None = None) -> Platform:
    """Platform of the running OS (or of the given platform.system() value).

    Raises:
        UsageError: If the OS has no distribution (only win, osx, linux do)
    """
    s = (system if system is not None else _platform.system()).lower()
    if s.startswith("win"):
        return Platform.WINDOWS
    if s.startswith("darwin") or s.startswith("mac"):
        return Platform.MACOS
    if s.startswith("linux"):
        return Platform.LINUX
    raise UsageError(f"Current platform {system or _platform.system()} is unsupported.")


def detect_architecture(machine: str | None = None) -> Architecture:
    """Architecture of the running machine (or of the given platform.machine() value).

    arm64 hosts map to x64, matching what the distribution feed offers them.

    Raises:
        UsageError: If the architecture is unknown
    """
    m = (machine if machine is not None else _platform.machine()).lower()
    if m in ("x86_64", "amd64", "x64", "arm64", "aarch64"):
        return Architecture.X64
    if m in ("i386", "i686", "x86"):
        return Architecture.X86
    raise UsageError(f"Current architecture {machine or _platform.machine()} is unsupported.")
