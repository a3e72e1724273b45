"""klarrio-build command line.

    klarrio-build [-b] [-p] [-t major|minor|revision] snapshot|release

snapshot  builds and pushes <repo>:<version>-SNAPSHOT
release   builds and pushes <repo>:<version>, tags the repository and
          increments the local version in the manifest
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from kb import __version__
from kb.cli.context import build_context
from kb.core.errors import ErrorCode
from kb.core.result import Err
from kb.manifest.model import MANIFEST_FILENAME
from kb.output.console import ConsoleProtocol, RichConsole, Style
from kb.output.errors import print_release_error, release_error_exit_code
from kb.release.confirm import prompt_confirmation
from kb.release.container import DockerClient
from kb.release.errors import ReleaseError, UsageError
from kb.release.service import ReleaseRequest, ReleaseService, resolve_upstep
from kb.release.timeouts import CONFIRM_TIMEOUT_SECONDS
from kb.version.semver import UpStep
from kb.version.target import parse_mode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _fail(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    print_release_error(error, console)
    raise typer.Exit(code=release_error_exit_code(error))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))


@app.command()
def main_command(
    ctx: typer.Context,
    mode: str = typer.Argument(
        ...,
        metavar="snapshot|release",
        help="snapshot (snap, s): upload <version>-SNAPSHOT. "
        "release (rel, r): upload <version>, tag it and bump the version number.",
    ),
    build_only: bool = typer.Option(
        False, "--build-only", "-b", help="Build the container only; don't push [snapshot only]"
    ),
    push_only: bool = typer.Option(
        False,
        "--push-only",
        "-p",
        help="Push an existing container; don't build it first [snapshot only]",
    ),
    upstep: UpStep | None = typer.Option(
        None,
        "--upstep",
        "-t",
        case_sensitive=False,
        help="Kind of release [release only, default: minor]",
        show_default=False,
    ),
    manifest: Path = typer.Option(
        Path(MANIFEST_FILENAME), "--manifest", help="Path to the project manifest"
    ),
    timeout: float = typer.Option(
        CONFIRM_TIMEOUT_SECONDS,
        "--timeout",
        min=0.0,
        help="Seconds to wait for release confirmation",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be done without building or publishing"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Build, publish and release a versioned container image."""
    del version
    console = RichConsole()

    parsed_mode = parse_mode(mode)
    if parsed_mode is None:
        console.print(ctx.get_usage(), Style.DIM)
        _fail(UsageError(f"unknown mode: {mode!r} (expected snapshot or release)"), console)

    request = ReleaseRequest(
        mode=parsed_mode,
        upstep=upstep,
        build_only=build_only,
        push_only=push_only,
        dry_run=dry_run,
    )
    valid = resolve_upstep(request)
    if isinstance(valid, Err):
        _fail(valid.error, console)

    cli_ctx = build_context(manifest, console=console)
    if isinstance(cli_ctx, Err):
        _fail(cli_ctx.error, console)
    cli = cli_ctx.value

    service = ReleaseService(
        manifest=cli.manifest,
        repo=cli.repo,
        console=console,
        container=DockerClient(console=console),
        confirm=prompt_confirmation,
        confirm_timeout=timeout,
        workdir=cli.project_root,
    )
    result = service.run(request)
    if isinstance(result, Err):
        _fail(result.error, console)


def main() -> None:
    app()
