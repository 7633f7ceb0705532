import pytest

from array_manager.errors import ArrayManagerError, InvalidArgumentError, KeyNotFoundError


def test_key_not_found_message():
    error = KeyNotFoundError("user.email")
    assert str(error) == "Key [user.email] not found in array"
    assert error.key == "user.email"


def test_error_hierarchy():
    assert issubclass(KeyNotFoundError, InvalidArgumentError)
    assert issubclass(KeyNotFoundError, KeyError)
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(InvalidArgumentError, ArrayManagerError)

    with pytest.raises(KeyError):
        raise KeyNotFoundError("x")
