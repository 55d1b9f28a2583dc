from webshop.domain.errors import DuplicateItemError, ErrorKind
from webshop.domain.result import Result


def test_success_carries_value():
    result = Result.success(42)

    assert result.is_success
    assert not result.is_failure
    assert result.value == 42
    assert result.errors == []
    assert result.kind is None


def test_failure_carries_kind_and_messages():
    result = Result.failure(ErrorKind.VALIDATION, "first", "second")

    assert result.is_failure
    assert result.value is None
    assert result.errors == ["first", "second"]
    assert result.error == "first; second"
    assert result.kind is ErrorKind.VALIDATION


def test_from_error_keeps_the_error_kind():
    result = Result.from_error(DuplicateItemError("Item 1 is already in the order"))

    assert result.kind is ErrorKind.DUPLICATE_ITEM
    assert result.errors == ["Item 1 is already in the order"]
