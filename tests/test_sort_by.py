# tests/test_sort_by.py
import pytest

from app.core.result import ErrorKind
from app.core.sort_by import SortBy

@pytest.mark.parametrize("value,expected", [
    ("newest", SortBy.NEWEST),
    ("oldest", SortBy.OLDEST),
    ("mostLiked", SortBy.MOST_LIKED),
    ("mostFavorited", SortBy.MOST_FAVORITED),
])
def test_parse_known_values(value, expected):
    result = SortBy.parse(value)
    assert result.ok
    assert result.value is expected

@pytest.mark.parametrize("value", ["", None, "NEWEST", "most_liked", "random"])
def test_parse_unknown_value_is_validation_error(value):
    result = SortBy.parse(value)
    assert not result.ok
    assert result.error.kind == ErrorKind.VALIDATION
    assert "newest" in result.error.message

def test_allowed_values_lists_all_keys():
    assert SortBy.allowed_values() == "newest, oldest, mostLiked, mostFavorited"
