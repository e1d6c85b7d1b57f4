from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Union

from .domain.models import FieldValidationError, ValidatedRequestParams
from .domain.result import Err, Ok, Result
from .settings import DEFAULT_PHOTOS_LIMIT, MAX_PHOTOS_LIMIT

ALBUM_ID_PARAM = "albumId"
OFFSET_PARAM = "offset"
LIMIT_PARAM = "limit"
DEFAULT_OFFSET = 0

_ALBUM_ID = re.compile(r"[0-9]+")
# integral decimals such as "2.0" are accepted for offset and limit
_NON_NEGATIVE_INTEGER = re.compile(r"([0-9]+)(?:\.0*)?")


@dataclass(frozen=True, slots=True)
class Absent:
    pass


@dataclass(frozen=True, slots=True)
class Single:
    value: str


@dataclass(frozen=True, slots=True)
class Multiple:
    values: tuple[str, ...]


QueryValue = Union[Absent, Single, Multiple]

ABSENT = Absent()


def query_value(values: Sequence[str]) -> QueryValue:
    """Classify every value given for one query key."""
    if not values:
        return ABSENT
    if len(values) == 1:
        return Single(values[0])
    return Multiple(tuple(values))


def invalid_album_id_error() -> FieldValidationError:
    return FieldValidationError(
        message="Invalid album id provided. Album id must be a non-negative integer",
        element_id=ALBUM_ID_PARAM,
    )


def invalid_offset_error() -> FieldValidationError:
    return FieldValidationError(
        message="Invalid offset provided. Offset must be a non-negative integer",
        element_id=OFFSET_PARAM,
    )


def invalid_limit_error(max_limit: int = MAX_PHOTOS_LIMIT) -> FieldValidationError:
    return FieldValidationError(
        message=(
            "Invalid limit provided. Limit must be a non-negative integer less than or "
            f"equal to {max_limit} and only one limit is allowed"
        ),
        element_id=LIMIT_PARAM,
    )


def _is_blank(text: str) -> bool:
    return not text.strip()


def _is_album_id(text: str) -> bool:
    return _ALBUM_ID.fullmatch(text.strip()) is not None


def _parse_non_negative_int(text: str, *, maximum: int | None = None) -> int | None:
    match = _NON_NEGATIVE_INTEGER.fullmatch(text.strip())
    if match is None:
        return None
    try:
        number = int(match.group(1))
    except ValueError:
        # more digits than int() converts
        return None
    if maximum is not None and number > maximum:
        return None
    return number


def _album_id_tokens(raw: QueryValue) -> list[str] | None:
    if isinstance(raw, Absent):
        return None
    values = (raw.value,) if isinstance(raw, Single) else raw.values
    return [token for value in values for token in value.split(",")]


def _validate_album_ids(raw: QueryValue) -> Result[tuple[str, ...] | None, FieldValidationError]:
    tokens = _album_id_tokens(raw)
    if tokens is None:
        return Ok(None)

    accepted: list[str] = []
    for token in tokens:
        if _is_blank(token):
            continue
        if not _is_album_id(token):
            return Err(invalid_album_id_error())
        accepted.append(token.strip())
    return Ok(tuple(accepted) or None)


def _validate_number(
    raw: QueryValue,
    *,
    default: int,
    error: FieldValidationError,
    maximum: int | None = None,
) -> Result[int, FieldValidationError]:
    if isinstance(raw, Absent):
        return Ok(default)
    if isinstance(raw, Multiple):
        return Err(error)
    if _is_blank(raw.value):
        return Ok(default)

    number = _parse_non_negative_int(raw.value, maximum=maximum)
    if number is None:
        return Err(error)
    return Ok(number)


def validate_photo_request(
    raw_album_ids: QueryValue,
    raw_offset: QueryValue,
    raw_limit: QueryValue,
    *,
    default_limit: int = DEFAULT_PHOTOS_LIMIT,
    max_limit: int = MAX_PHOTOS_LIMIT,
) -> Result[ValidatedRequestParams, list[FieldValidationError]]:
    """Validate the photo filters of one request.

    Every field is checked independently and all failing fields are reported
    together, in the order album id, offset, limit. Absent or blank numeric
    fields fall back to their defaults; blank album id tokens are dropped.
    """
    album_ids = _validate_album_ids(raw_album_ids)
    offset = _validate_number(raw_offset, default=DEFAULT_OFFSET, error=invalid_offset_error())
    limit = _validate_number(
        raw_limit,
        default=default_limit,
        error=invalid_limit_error(max_limit),
        maximum=max_limit,
    )

    if isinstance(album_ids, Ok) and isinstance(offset, Ok) and isinstance(limit, Ok):
        return Ok(
            ValidatedRequestParams(
                album_ids=album_ids.value,
                offset=offset.value,
                limit=limit.value,
            )
        )
    return Err([result.error for result in (album_ids, offset, limit) if isinstance(result, Err)])
