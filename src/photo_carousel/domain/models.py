from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from ..settings import DEFAULT_PHOTOS_LIMIT

ElementId = Literal["albumId", "offset", "limit"]


def _json_integer(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a JSON number")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("must be an integral number")
    return int(value)


JsonInt = Annotated[int, BeforeValidator(_json_integer)]


class Photo(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
    )

    album_id: JsonInt
    id: JsonInt
    title: StrictStr
    url: StrictStr
    thumbnail_url: StrictStr


class ValidatedRequestParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    album_ids: tuple[str, ...] | None = None
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_PHOTOS_LIMIT, ge=0)

    @field_validator("album_ids")
    @classmethod
    def validate_album_ids(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        if value is None:
            return None
        tokens = tuple(token.strip() for token in value if token.strip())
        return tokens or None


class FieldValidationError(BaseModel):
    """A complaint about one request parameter, addressed to its input field."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    message: str
    element_id: ElementId
