from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from jobly.services.errors import RepositoryValidationError

FiltersT = TypeVar("FiltersT", bound=BaseModel)


def parse_filters(model: type[FiltersT], query: Mapping[str, Any] | None) -> FiltersT:
    """Validate raw query values into ``model``, raising RepositoryValidationError on failure."""
    try:
        return model.model_validate(dict(query or {}))
    except ValidationError as exc:
        raise RepositoryValidationError(describe_validation_error(exc)) from exc


def describe_validation_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)
