from pydantic import Field

from .common import BitbucketModel
from .common import ErrorsHolder


class Person(BitbucketModel):
    name: str | None = None
    email_address: str | None = None
    id: int | None = None
    display_name: str | None = None
    active: bool | None = None
    slug: str | None = None
    type: str | None = None


class Parent(BitbucketModel):
    id: str
    display_id: str | None = None


class Commit(ErrorsHolder):
    id: str | None = None
    display_id: str | None = None
    author: Person | None = None
    author_timestamp: int | None = None
    committer: Person | None = None
    committer_timestamp: int | None = None
    message: str | None = None
    parents: list[Parent] = Field(default_factory=list)
