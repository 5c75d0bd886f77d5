"""Models shared by every Bitbucket response."""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class BitbucketModel(BaseModel):
    """Immutable model populated from Bitbucket's camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class VetoMessage(BitbucketModel):
    summary_message: str | None = None
    detailed_message: str | None = None


class Error(BitbucketModel):
    """A single error reported by the server or synthesized by the client."""

    message: str | None = None
    context: str | None = None
    exception_name: str | None = None
    conflicted: bool | None = None
    veto_messages: list[VetoMessage] = []


class ErrorsHolder(BitbucketModel):
    """
    Base for every result object.

    A result is successful when `errors` is empty. On failure the remaining
    fields keep their empty defaults.
    """

    errors: list[Error] = []

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0


class Page(ErrorsHolder):
    start: int | None = None
    limit: int | None = None
    size: int | None = None
    next_page_start: int | None = None
    is_last_page: bool | None = None
