"""Shared utilities for building Bitbucket requests."""

from typing import Any
from urllib.parse import quote

import aiofiles
import aiohttp

JSON_ACCEPT = "application/json"
TEXT_ACCEPT = "text/plain"

EMPTY_PATHS = (None, "", "/")


def normalize_path(path: str | None) -> str | None:
    """
    Normalize an optional path argument.

    `None`, the empty string and a bare `/` all mean "no path". Any other
    value is returned unchanged.

    Args:
        path: Optional repository path

    Returns:
        The path, or None when no path suffix should be appended
    """
    if path in EMPTY_PATHS:
        return None
    return path


def quote_path(path: str) -> str:
    """
    Percent-encode a repository path for use in a URL path.

    Slashes separate segments and are kept; `#`, `?`, `%` and every other
    reserved character are escaped so the path cannot leak into the query or
    fragment.
    """
    return quote(path, safe="/")


def join_path(base: str, path: str | None) -> str:
    """
    Append an optional, percent-encoded path segment to a URL path.

    Args:
        base: URL path without trailing slash
        path: Optional path, normalized with normalize_path

    Returns:
        base, or base/path when a non-trivial path was given
    """
    path = normalize_path(path)
    if path is None:
        return base
    return f"{base}/{quote_path(path)}"


def build_params(**kwargs: Any) -> dict[str, Any]:
    """
    Build query parameters, dropping the ones that were not provided.

    Booleans are only sent when True and are rendered as the string "true",
    integers are kept as integers.

    Returns:
        Dictionary suitable for aiohttp `params`
    """
    params = {}
    for key, value in kwargs.items():
        if value is None or value is False:
            continue
        if value is True:
            params[key] = "true"
        else:
            params[key] = value
    return params


def build_form(fields: dict[str, str | None]) -> aiohttp.FormData:
    """
    Build a multipart form body from the provided fields.

    Fields whose value is None are left out.

    Args:
        fields: Form field names mapped to their values

    Returns:
        Multipart FormData
    """
    form = aiohttp.FormData(default_to_multipart=True)
    for name, value in fields.items():
        if value is not None:
            form.add_field(name, value)
    return form


async def read_text(path: str) -> str:
    """
    Read a local text file.

    Args:
        path: Path to the file

    Returns:
        File content
    """
    async with aiofiles.open(path) as f:
        return await f.read()
