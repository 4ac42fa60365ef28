import pytest

from polyglot.core.exceptions import ValidationError
from polyglot.core.validation import (
    FieldError,
    check_not_null,
    group_errors,
    raise_for_errors,
)


def test_group_errors_collects_messages_per_field():
    errors = [
        FieldError("code", "first"),
        FieldError("name", "second"),
        FieldError("code", "third"),
    ]

    assert group_errors(errors) == {"code": ["first", "third"], "name": ["second"]}


def test_raise_for_errors_is_silent_without_errors():
    raise_for_errors([])


def test_raise_for_errors_raises_422_with_field_messages():
    with pytest.raises(ValidationError) as exc_info:
        raise_for_errors([FieldError("tags.1", "One or more selected tags are invalid.")])

    error = exc_info.value
    assert error.status_code == 422
    assert error.error_code == "VALIDATION_ERROR"
    assert error.to_dict()["details"] == {
        "errors": {"tags.1": ["One or more selected tags are invalid."]}
    }


def test_check_not_null_only_flags_fields_that_were_sent():
    data = {"key": None, "value": "hello"}

    errors = check_not_null(data, ("key", "value", "group"))

    assert errors == [FieldError("key", "The key field may not be null.")]
