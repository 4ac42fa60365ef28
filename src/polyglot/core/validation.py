"""Field-level validation results.

Checks that need the database (uniqueness, foreign references) are plain
functions returning a list of ``FieldError``. An empty list means the input
is valid; ``raise_for_errors`` converts anything else into a 422.
"""

from collections.abc import Iterable
from typing import Any, NamedTuple

from polyglot.core.exceptions import ValidationError


class FieldError(NamedTuple):
    field: str
    message: str


def group_errors(errors: Iterable[FieldError]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped


def raise_for_errors(errors: list[FieldError]) -> None:
    if errors:
        raise ValidationError(group_errors(errors))


def check_not_null(data: dict[str, Any], fields: Iterable[str]) -> list[FieldError]:
    """Reject explicit nulls for columns that cannot hold them.

    ``data`` is the ``exclude_unset`` dump of an update schema, so a key
    being present means the client sent it.
    """
    return [
        FieldError(field, f"The {field} field may not be null.")
        for field in fields
        if field in data and data[field] is None
    ]
