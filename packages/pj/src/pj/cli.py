"""Command-line interface for managing the pj binary.

Usage:
    pj-binary status
    pj-binary install [--force] [--version X.Y.Z]
    pj-binary update [--force]
    pj-binary check [PATH]
    pj-binary clear-cache
    pj-binary postinstall

Exit Codes:
    0: Success
    1: Operation failed, or 'check' found an unusable binary
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from pj.domain.binary import DownloadProgress
from pj.domain.exceptions import PjError
from pj.factories import get_binary_manager
from pj.usecases.binary_manager import BinaryManager

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

PREFIX = "pj-py"


@contextmanager
def _pj_errors() -> Iterator[None]:
    """Report PjError as a click error (exit code 1)."""
    try:
        yield
    except PjError as e:
        raise click.ClickException(str(e)) from e


class _ProgressPrinter:
    """Renders download progress as a single rewritten line."""

    def __init__(self) -> None:
        self.printed = False

    def __call__(self, progress: DownloadProgress) -> None:
        if progress.percent is None:
            return
        click.echo(f"\r{PREFIX}: Downloading... {progress.percent}%", nl=False)
        self.printed = True

    def finish(self) -> None:
        if self.printed:
            click.echo()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="pj-py")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Locate, install and update the pj binary."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create the manager if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = get_binary_manager()


@cli.command("status")
@click.pass_obj
def status_cmd(manager: BinaryManager) -> None:
    """Show which pj binary would be used."""
    status = manager.get_status()
    click.echo(f"available: {'yes' if status.available else 'no'}")
    click.echo(f"path: {status.path if status.path is not None else '-'}")
    click.echo(f"version: {status.version or '-'}")
    click.echo(f"source: {status.source.value}")


@cli.command("install")
@click.option("--force", is_flag=True, help="Ignore the cache and download again")
@click.option("--version", "pinned_version", default=None, help="Install exactly this version")
@click.pass_obj
def install_cmd(manager: BinaryManager, force: bool, pinned_version: str | None) -> None:
    """Resolve a usable pj binary, downloading it if needed."""
    printer = _ProgressPrinter()
    with _pj_errors():
        try:
            path = manager.resolve_binary_path(
                force_refresh=force,
                pinned_version=pinned_version,
                on_progress=printer,
            )
        finally:
            printer.finish()
    click.echo(str(path))


@cli.command("update")
@click.option("--force", is_flag=True, help="Reinstall even if already current")
@click.pass_obj
def update_cmd(manager: BinaryManager, force: bool) -> None:
    """Update the cached pj binary to the newest compatible release."""
    printer = _ProgressPrinter()
    with _pj_errors():
        try:
            path = manager.refresh_cached_install(force=force, on_progress=printer)
        finally:
            printer.finish()
    version = manager.read_installed_version(path)
    click.echo(f"pj {version or 'unknown'} at {path}")


@cli.command("check")
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.pass_obj
def check_cmd(manager: BinaryManager, path: Path | None) -> None:
    """Verify a pj binary (default: the one that would be used)."""
    if path is None:
        path = manager.get_status().path

    result = manager.check_binary(path)
    if result.is_ok:
        click.echo(f"ok: {path} (pj {result.version})")
        return

    click.echo(f"{result.status.value}: {result.error_message}", err=True)
    raise SystemExit(1)


@cli.command("clear-cache")
@click.pass_obj
def clear_cache_cmd(manager: BinaryManager) -> None:
    """Delete the downloaded pj binary and its metadata."""
    with _pj_errors():
        try:
            manager.purge_cache()
        except OSError as e:
            raise click.ClickException(f"Failed to clear cache: {e}") from e
    click.echo("Cache cleared")


@cli.command("postinstall")
@click.pass_obj
def postinstall_cmd(manager: BinaryManager) -> None:
    """Best-effort pre-download of the pj binary. Never fails."""
    if os.environ.get("CI") and not os.environ.get("PJ_INSTALL_BINARY"):
        click.echo(f"{PREFIX}: Skipping binary download in CI environment")
        return

    if os.environ.get("PJ_SKIP_INSTALL"):
        click.echo(f"{PREFIX}: Skipping binary download (PJ_SKIP_INSTALL is set)")
        return

    printer = _ProgressPrinter()
    try:
        status = manager.get_status()
        if status.available:
            click.echo(
                f"{PREFIX}: Using existing pj binary (v{status.version}) "
                f"from {status.source.value}"
            )
            return

        click.echo(f"{PREFIX}: Downloading pj binary...")
        path = manager.resolve_binary_path(on_progress=printer)
        printer.finish()
        version = manager.read_installed_version(path)
        click.echo(f"{PREFIX}: Successfully installed pj v{version}")
        click.echo(f"{PREFIX}: Binary location: {path}")
    except (PjError, OSError) as e:
        printer.finish()
        click.echo(f"{PREFIX}: Warning - Could not pre-download binary: {e}", err=True)
        click.echo(f"{PREFIX}: The binary will be downloaded on first use", err=True)


def main() -> None:
    """CLI entry point used by the `pj-binary` console script."""
    cli()
