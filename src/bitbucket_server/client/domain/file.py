"""Models returned by the file API."""

from typing import Any

from pydantic import Field
from pydantic import field_validator

from .commit import Commit
from .commit import Person
from .common import BitbucketModel
from .common import ErrorsHolder
from .common import Page


class RawContent(ErrorsHolder):
    value: str | None = None


class Line(BitbucketModel):
    text: str


class Blame(BitbucketModel):
    author: Person | None = None
    author_timestamp: int | None = None
    commit_hash: str | None = None
    display_commit_hash: str | None = None
    commit_id: str | None = None
    commit_display_id: str | None = None
    committer: Person | None = None
    committer_timestamp: int | None = None
    file_name: str | None = None
    line_number: int | None = None
    spanned_lines: int | None = None


class LinePage(Page):
    """
    A page of lines from the browse endpoint.

    `blame` maps the first line number covered by each blame entry to the
    entry itself. The server sends blame as a list; it is keyed here so
    callers can look up attribution by line. Every entry must carry a
    distinct `lineNumber`.
    """

    values: list[Line] = Field(default_factory=list, alias="lines")
    blame: dict[int, Blame] = Field(default_factory=dict)

    @field_validator("blame", mode="before")
    @classmethod
    def key_blame_by_line(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, list):
            keyed = {}
            for entry in value:
                if isinstance(entry, Blame):
                    line_number = entry.line_number
                elif isinstance(entry, dict):
                    line_number = entry.get("lineNumber", entry.get("line_number"))
                else:
                    line_number = None
                if line_number is None:
                    raise ValueError("blame entry without a line number")
                if line_number in keyed:
                    raise ValueError(f"duplicate blame entry for line {line_number}")
                keyed[line_number] = entry
            return keyed
        return value


class FilesPage(Page):
    values: list[str] = Field(default_factory=list)


class LastModified(ErrorsHolder):
    latest_commit: Commit | None = None
    files: dict[str, Commit] = Field(default_factory=dict)
