"""
Native Click implementation of the upload command.

Usage: artup upload [PATTERN TARGET] [--spec FILE] [options]
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from pydantic import ValidationError

from ...core.bootstrap import bootstrap
from ...core.exceptions import SpecFileError
from ...core.models.config import ArtifactoryDetails, UploadConfiguration
from ...core.models.spec import SpecFiles, parse_bool, parse_spec_vars
from ...services.upload import UploadService
from ..context import ArtupContext


def _server_details(
    ctx: ArtupContext,
    url: str | None,
    user: str | None,
    password: str | None,
    access_token: str | None,
) -> ArtifactoryDetails:
    """Merge command-line connection flags over the configured server."""
    overrides = {
        "url": url,
        "user": user,
        "password": password,
        "access_token": access_token,
    }
    return ctx.settings.server.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )


def _is_set(raw: str | None) -> bool:
    """Read a boolean flag value; malformed values are reported per entry."""
    try:
        return parse_bool(raw) if raw else False
    except ValueError:
        return False


@click.command("upload")
@click.argument("pattern", required=False)
@click.argument("target", required=False)
@click.option("--spec", "spec_path", type=click.Path(path_type=Path), help="Path to a JSON file spec.")
@click.option("--spec-vars", help="Spec variables as 'key1=value1;key2=value2'.")
@click.option("--props", default="", help="Properties as 'key1=value1;key2=value2'.")
@click.option("--exclusions", default="", help="Semicolon-separated patterns to skip.")
@click.option("--recursive", help="Search sub-directories (default: true).")
@click.option("--flat", help="Drop the local directory structure (default: true).")
@click.option("--regexp", help="Treat PATTERN as a regular expression (default: false).")
@click.option("--include-dirs", help="Also deploy matching directories (default: false).")
@click.option("--explode", help="Extract archives in the repository (default: false).")
@click.option("--build-name", default="", help="Build name to record the artifacts under.")
@click.option("--build-number", default="", help="Build number to record the artifacts under.")
@click.option("--deb", default="", help="Debian coordinates 'distribution/component/architecture'.")
@click.option("--threads", type=click.IntRange(min=1), default=3, show_default=True)
@click.option("--retries", type=click.IntRange(min=0), default=3, show_default=True)
@click.option("--symlinks", is_flag=True, help="Upload symlinks as links instead of their targets.")
@click.option("--dry-run", is_flag=True, help="Show what would be uploaded without uploading.")
@click.option("--url", help="Repository URL.")
@click.option("--user", help="Repository user.")
@click.option("--password", help="Repository password.")
@click.option("--access-token", help="Repository access token.")
@click.pass_obj
def upload(
    ctx: ArtupContext,
    pattern: str | None,
    target: str | None,
    spec_path: Path | None,
    spec_vars: str | None,
    props: str,
    exclusions: str,
    recursive: str | None,
    flat: str | None,
    regexp: str | None,
    include_dirs: str | None,
    explode: str | None,
    build_name: str,
    build_number: str,
    deb: str,
    threads: int,
    retries: int,
    symlinks: bool,
    dry_run: bool,
    url: str | None,
    user: str | None,
    password: str | None,
    access_token: str | None,
) -> None:
    """Upload files to the repository.

    Files are selected either by PATTERN and deployed to TARGET, or by
    the entries of a JSON file spec (--spec).

    \b
    Examples:

        artup upload "out/*.zip" libs-release/app/

        artup upload "out/(.*)\\.jar" "libs/{1}.jar" --regexp true

        artup upload --spec spec.json --build-name app --build-number 7
    """
    if bool(spec_path) == bool(pattern):
        raise click.UsageError("Provide either PATTERN and TARGET or --spec, but not both.")

    try:
        if spec_path is not None:
            spec = SpecFiles.from_json_file(spec_path, parse_spec_vars(spec_vars))
        else:
            if not target:
                raise click.UsageError("TARGET is required with PATTERN.")
            spec = SpecFiles.from_args(
                pattern,
                target,
                props=props,
                exclusions=[e for e in exclusions.split(";") if e],
                recursive=recursive,
                flat=flat,
                regexp=regexp,
                include_dirs=include_dirs,
                explode=explode,
            )
    except (SpecFileError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    if bool(build_name) != bool(build_number):
        raise click.UsageError("--build-name and --build-number must be used together.")

    settings = ctx.settings
    configuration = UploadConfiguration(
        deb=deb,
        threads=threads,
        min_checksum_deploy_size_kb=settings.min_checksum_deploy_size_kb,
        build_name=build_name,
        build_number=build_number,
        dry_run=dry_run,
        symlink=symlinks,
        explode_archive=_is_set(explode),
        art_details=_server_details(ctx, url, user, password, access_token),
        retries=retries,
        home_dir=settings.home_dir,
    )

    bootstrap(settings)
    summary = UploadService().upload(spec, configuration)

    click.echo(json.dumps(summary.to_dict(), indent=2))
    if summary.error is not None:
        click.echo(f"Error: {summary.error}", err=True)
    if not summary.ok:
        raise click.exceptions.Exit(1)
