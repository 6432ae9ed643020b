"""Installer-specific exceptions.

Every failure raised by the installer derives from InstallerError, so callers
catch a single type and inspect ``__cause__`` for diagnostics.
"""


class InstallerError(Exception):
    """Base exception for runtime installation."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (paths, versions, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class MalformedVersionError(InstallerError):
    """Requested version is neither "major.minor" nor "major.minor.patch"."""


class UnsupportedRuntimeError(InstallerError):
    """Runtime kind outside the supported set."""


class UnsupportedPlatformError(InstallerError):
    """Platform outside the supported set, or one with no archive format."""


class UnsupportedArchitectureError(InstallerError):
    """Architecture outside the supported set."""


class InstallVerificationError(InstallerError):
    """Extraction finished but the expected version directory is missing."""


class UnexpectedInstallError(InstallerError):
    """Any other failure during installation (network, filesystem, archive)."""


class UsageError(InstallerError):
    """Invalid command-line usage."""
