"""Tests for spaserve.__init__ — lazy import registry covers all public names."""

import pytest

import spaserve


@pytest.mark.parametrize("name", spaserve.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(spaserve, name)
    assert obj is not None, f"spaserve.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        spaserve.__getattr__("ThisDoesNotExist")
