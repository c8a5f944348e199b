"""Tests for sentier.__init__: lazy import registry covers all public names."""

import pytest

import sentier


@pytest.mark.parametrize("name", sentier.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(sentier, name)
    assert obj is not None, f"sentier.{name} resolved to None"


def test_query_is_the_declaration_helper() -> None:
    from sentier.http.query import query

    assert sentier.query is query


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        sentier.__getattr__("ThisDoesNotExist")
