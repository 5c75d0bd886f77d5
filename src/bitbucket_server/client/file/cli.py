"""File API CLI commands."""

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Annotated

import typer

from ..api import BitbucketApi
from ..config import OutputFormat
from ..domain import ErrorsHolder
from ..lib.utils import read_text
from . import FileApi

logger = logging.getLogger(__name__)

cli = typer.Typer(no_args_is_help=True)


async def _run(operation: Callable[[FileApi], Awaitable[ErrorsHolder]]) -> ErrorsHolder:
    async with BitbucketApi() as api:
        return await operation(api.file_api())


def _check(result: ErrorsHolder) -> None:
    if not result.ok:
        typer.echo(f"found {len(result.errors)} errors:", err=True)
        for err in result.errors:
            typer.echo(err.message, err=True)
        raise typer.Exit(code=1)


def _print_json(result: ErrorsHolder) -> None:
    print(result.model_dump_json(indent=2, by_alias=True))


@cli.command("raw")
def raw(
    project: Annotated[str, typer.Argument(help="project key")],
    repo: Annotated[str, typer.Argument(help="repository slug")],
    path: Annotated[str, typer.Argument(help="file path")],
    at: Annotated[str, typer.Option(help="branch, tag or commit")] = None,
):
    """Print the raw content of a file."""
    res = asyncio.run(_run(lambda api: api.raw(project, repo, path, at)))
    _check(res)
    print(res.value, end="")


@cli.command("list-lines")
def list_lines(
    project: Annotated[str, typer.Argument(help="project key")],
    repo: Annotated[str, typer.Argument(help="repository slug")],
    path: Annotated[str, typer.Argument(help="file path")],
    at: Annotated[str, typer.Option(help="branch, tag or commit")] = None,
    blame: Annotated[bool, typer.Option(help="include blame")] = False,
    start: Annotated[int, typer.Option(help="first line index")] = None,
    limit: Annotated[int, typer.Option(help="maximum number of lines")] = None,
    output: Annotated[OutputFormat, typer.Option(help="output format")] = OutputFormat.JSON,
):
    """Browse the lines of a file."""
    res = asyncio.run(_run(lambda api: api.list_lines(project, repo, path, at=at, blame=blame, start=start, limit=limit)))
    _check(res)
    if output == OutputFormat.TEXT:
        for line in res.values:
            print(line.text)
    else:
        _print_json(res)


@cli.command("update")
def update(
    project: Annotated[str, typer.Argument(help="project key")],
    repo: Annotated[str, typer.Argument(help="repository slug")],
    path: Annotated[str, typer.Argument(help="file path")],
    branch: Annotated[str, typer.Argument(help="branch to commit to")],
    content_file: Annotated[str, typer.Option(help="local file holding the new content")] = None,
    content: Annotated[str, typer.Option(help="new content")] = None,
    message: Annotated[str, typer.Option(help="commit message")] = None,
    source_commit_id: Annotated[str, typer.Option(help="commit the edit is based on")] = None,
    source_branch: Annotated[str, typer.Option(help="branch to create the target branch from")] = None,
):
    """Commit new content for a file."""
    if (content_file is None) == (content is None):
        raise typer.BadParameter("provide exactly one of --content-file or --content")

    async def _update(api: FileApi):
        body = content if content is not None else await read_text(content_file)
        return await api.update_content(project, repo, path, branch, body, message, source_commit_id, source_branch)

    res = asyncio.run(_run(_update))
    _check(res)
    _print_json(res)


@cli.command("list-files")
def list_files(
    project: Annotated[str, typer.Argument(help="project key")],
    repo: Annotated[str, typer.Argument(help="repository slug")],
    directory: Annotated[str, typer.Argument(help="directory to list")] = None,
    at: Annotated[str, typer.Option(help="branch, tag or commit")] = None,
    start: Annotated[int, typer.Option(help="first path index")] = None,
    limit: Annotated[int, typer.Option(help="maximum number of paths")] = None,
    output: Annotated[OutputFormat, typer.Option(help="output format")] = OutputFormat.JSON,
):
    """List file paths in a repository."""
    res = asyncio.run(_run(lambda api: api.list_files(project, repo, directory, at, start, limit)))
    _check(res)
    if output == OutputFormat.TEXT:
        for file_path in res.values:
            print(file_path)
    else:
        _print_json(res)


@cli.command("last-modified")
def last_modified(
    project: Annotated[str, typer.Argument(help="project key")],
    repo: Annotated[str, typer.Argument(help="repository slug")],
    at: Annotated[str, typer.Argument(help="branch, tag or commit")],
    path: Annotated[str, typer.Option(help="directory to summarize")] = None,
):
    """Show the latest commit for each file."""
    res = asyncio.run(_run(lambda api: api.last_modified(project, repo, path, at)))
    _check(res)
    _print_json(res)


if __name__ == "__main__":
    cli()
