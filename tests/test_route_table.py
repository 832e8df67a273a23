"""Tests for spaserve.routing.table — the client route table."""

import pytest

from spaserve.errors import ConfigurationError
from spaserve.routes import SITE_ROUTES
from spaserve.routing.table import RouteTable


class TestRouteTable:
    def test_site_routes_are_members(self) -> None:
        table = RouteTable(SITE_ROUTES)
        for path in SITE_ROUTES:
            assert path in table

    def test_unknown_path(self) -> None:
        assert "/nope" not in RouteTable(SITE_ROUTES)

    def test_root_only_matches_root(self) -> None:
        table = RouteTable(["/"])
        assert "/" in table
        assert "/turismo" not in table

    def test_non_string_is_not_member(self) -> None:
        assert 42 not in RouteTable(["/"])

    def test_param_pattern(self) -> None:
        match = RouteTable(["/productos/{id:int}"]).match("/productos/7")
        assert match is not None
        assert match.pattern == "/productos/{id:int}"
        assert match.path_params == {"id": "7"}

    def test_wildcard(self) -> None:
        table = RouteTable(["/admin/*"])
        match = table.match("/admin/places/3")
        assert match is not None
        assert match.path_params == {"path": "places/3"}

    def test_literal_match_has_no_params(self) -> None:
        match = RouteTable(["/turismo"]).match("/turismo/")
        assert match is not None
        assert match.pattern == "/turismo"
        assert match.path_params == {}

    def test_most_specific_pattern_wins(self) -> None:
        table = RouteTable(["/admin/*", "/admin/{section}", "/admin/login"])
        assert table.match("/admin/login").pattern == "/admin/login"
        assert table.match("/admin/places").pattern == "/admin/{section}"
        assert table.match("/admin/places/3").pattern == "/admin/*"

    def test_wildcard_needs_a_segment(self) -> None:
        assert "/admin" not in RouteTable(["/admin/*"])

    def test_no_match_returns_none(self) -> None:
        assert RouteTable(["/turismo"]).match("/cultura") is None

    def test_duplicates_removed_order_kept(self) -> None:
        table = RouteTable(["/b", "/a", "/b"])
        assert table.patterns == ("/b", "/a")
        assert list(table) == ["/b", "/a"]
        assert len(table) == 2

    def test_empty(self) -> None:
        table = RouteTable()
        assert len(table) == 0
        assert "/" not in table

    def test_invalid_pattern(self) -> None:
        with pytest.raises(ConfigurationError):
            RouteTable(["/share/<slug>"])

    def test_repr(self) -> None:
        assert repr(RouteTable(["/turismo"])) == "RouteTable(['/turismo'])"
