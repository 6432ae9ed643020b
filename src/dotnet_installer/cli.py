"""dotnet-install command - thin click wrapper around install_standalone.

Failures are reported on stderr and the command still exits 0.
"""

import asyncio
import logging
import traceback
from pathlib import Path

import click

from .exceptions import UnsupportedRuntimeError
from .exceptions import UsageError
from .installer import install_standalone
from .platforms import detect_architecture
from .platforms import detect_platform
from .schema import DEFAULT_CACHED_FEED
from .schema import DEFAULT_UNCACHED_FEED
from .schema import InstallRequest
from .schema import RuntimeKind

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

EPILOG = """\b
The -v option is required. Passing just a major and minor
version will cause the app to download the latest published
version in that series.

\b
Example: "-v 2.1.4" will install exactly version 2.1.4
         "-v 2.1" may install 2.1.0, 2.1.6, etc. - whatever
         the latest in the 2.1 series is.
"""


def _parse_runtime(value: str | None) -> RuntimeKind:
    if not value:
        return RuntimeKind.CORE
    try:
        return RuntimeKind.parse(value)
    except UnsupportedRuntimeError:
        raise UsageError(f"Unrecognized runtime option: {value}") from None


def _print_failure(exc: BaseException, show_traceback: bool) -> None:
    """Print every message in the exception's cause chain to stderr."""
    current: BaseException | None = exc
    while current is not None:
        click.echo(f"{click.style('Exception:', fg='red', bold=True)} {current}", err=True)
        if show_traceback:
            tb = "".join(traceback.format_tb(current.__traceback__))
            click.echo(click.style(tb, dim=True), err=True)
        current = current.__cause__


@click.command(name="dotnet-install", context_settings=CONTEXT_SETTINGS, epilog=EPILOG)
@click.option("-i", "--install-dir", type=click.Path(file_okay=False, path_type=Path), help="Where to install")
@click.option("-r", "--runtime", help="The runtime to install (dotnet or aspnet)")
@click.option("-p", "--platform", "platform_name", help="The platform to install for (win, osx, linux or android)")
@click.option("-a", "--arch", help="The OS architecture to install for (x64 or x86)")
@click.option("-v", "--version", help="What version to install (e.g., 2.1 or 2.1.4)")
@click.option("-f", "--force", is_flag=True, help="Force reinstallation")
@click.option("--feed", envvar="DOTNET_INSTALL_FEED", default=DEFAULT_CACHED_FEED, show_default=True, help="Archive feed")
@click.option(
    "--uncached-feed",
    envvar="DOTNET_INSTALL_UNCACHED_FEED",
    default=DEFAULT_UNCACHED_FEED,
    show_default=True,
    help="Feed serving latest.version pointers",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging and tracebacks")
def main(
    install_dir: Path | None,
    runtime: str | None,
    platform_name: str | None,
    arch: str | None,
    version: str | None,
    force: bool,
    feed: str,
    uncached_feed: str,
    verbose: bool,
):
    """Performs standalone .NET Core installation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        runtime_kind = _parse_runtime(runtime)
        platform_id = platform_name or detect_platform()
        arch_id = arch or detect_architecture()
        if not version:
            raise UsageError("The -v|--version parameter is required.")

        request = InstallRequest(
            install_dir=(install_dir or Path.cwd()).resolve(),
            platform=platform_id,
            architecture=arch_id,
            version=version,
            runtime=runtime_kind,
            feed=feed,
            uncached_feed=uncached_feed,
            force=force,
            log=click.echo,
        )

        outcome = asyncio.run(install_standalone(request))
        logger.debug(f"Install outcome: {outcome}")

    except UsageError as e:
        click.echo(f"{click.style('Error:', fg='red', bold=True)} {e.message}", err=True)
        click.echo(f"Try: {click.style('dotnet-install -h', bold=True)}", err=True)
    except Exception as e:
        _print_failure(e, show_traceback=verbose)
