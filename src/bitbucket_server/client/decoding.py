"""
Decoding of Bitbucket responses into result models.

Non-2xx responses never raise: they are decoded into the `errors` list of the
same result type the caller asked for.
"""

import json
import logging
from typing import TypeVar

from pydantic import ValidationError

from . import ResponseDecodeError
from .domain import Error
from .domain import ErrorsHolder

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ErrorsHolder)


def is_success(status: int) -> bool:
    return 200 <= status < 300


def _parse_error(status: int, err: dict) -> Error:
    try:
        return Error.model_validate(err)
    except ValidationError:
        # keep the message when other fields have unexpected shapes
        logger.debug(f"malformed error entry for status {status}: {err}")
        message = err.get("message")
        if message is None:
            return Error(message=f"Unexpected response status {status}")
        return Error(message=str(message))


def parse_errors(status: int, body: str | None) -> list[Error]:
    """
    Parse an error response body.

    Structured bodies look like `{"errors": [{"message": ...}, ...]}`. Anything
    else yields a single synthesized error naming the status.

    Args:
        status: HTTP status code
        body: Response body text

    Returns:
        Non-empty list of errors
    """
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("errors"), list) and len(payload["errors"]) > 0:
        errors = []
        for err in payload["errors"]:
            if isinstance(err, dict):
                errors.append(_parse_error(status, err))
            else:
                errors.append(Error(message=str(err)))
        return errors

    logger.debug(f"unstructured error body for status {status}")
    return [Error(message=f"Unexpected response status {status}")]


def decode_response(model: type[T], status: int, body: str | None) -> T:
    """
    Decode a response into `model`.

    Args:
        model: Result model class
        status: HTTP status code
        body: Response body text

    Returns:
        Populated model on success, or a model holding only `errors`

    Raises:
        ResponseDecodeError: If a successful body does not match the model
    """
    if not is_success(status):
        errors = parse_errors(status, body)
        logger.warning(f"{model.__name__} request failed with status {status}: {[e.message for e in errors]}")
        return model(errors=errors)

    try:
        return model.model_validate_json(body or "{}")
    except ValidationError as e:
        logger.exception(f"invalid {model.__name__} body for status {status}")
        raise ResponseDecodeError(model.__name__, status) from e
