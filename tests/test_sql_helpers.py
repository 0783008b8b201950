"""Tests for the partial update SQL helper."""
import pytest

from surveygenie.utils.exceptions import BadRequestError
from surveygenie.utils.sql import PartialUpdate, reject_null_fields, sql_for_partial_update


def test_empty_data_is_rejected():
    with pytest.raises(BadRequestError, match="No data"):
        sql_for_partial_update({}, {"a": "col_a"})


def test_none_data_is_rejected():
    with pytest.raises(BadRequestError):
        sql_for_partial_update(None)


def test_mapped_and_unmapped_fields():
    """Mapped names are translated; the rest pass through in order."""
    result = sql_for_partial_update({"a": 1, "b": 2}, {"a": "col_a"})

    assert result.set_cols == '"col_a"=:p1, "b"=:p2'
    assert result.values == [1, 2]


def test_field_map_is_optional():
    result = sql_for_partial_update({"first_name": "Aliya", "age": 32})

    assert result.set_cols == '"first_name"=:p1, "age"=:p2'
    assert result.values == ["Aliya", 32]


def test_next_placeholder_follows_assignments():
    result = sql_for_partial_update({"title": "New", "description": "Desc"})

    assert result.next_placeholder == ":p3"
    assert result.params(42) == {"p1": "New", "p2": "Desc", "p3": 42}


def test_params_without_extra_values():
    result = PartialUpdate(set_cols='"title"=:p1', values=["x"])

    assert result.params() == {"p1": "x"}


def test_null_fields_are_rejected_by_name():
    with pytest.raises(BadRequestError, match="Cannot set survey fields to null: description, title"):
        reject_null_fields({"title": None, "description": None}, "survey")


def test_non_null_fields_pass():
    reject_null_fields({"title": "", "description": "Desc"}, "survey")
    reject_null_fields(None, "survey")
