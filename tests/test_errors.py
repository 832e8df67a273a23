"""Tests for spaserve.errors — exception hierarchy."""

import pytest

from spaserve.errors import (
    AssetStoreError,
    BadRequest,
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    PathTraversal,
    SpaServeError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls", [ConfigurationError, PathTraversal, AssetStoreError, HTTPError, NotFound]
    )
    def test_all_are_spaserve_errors(self, cls: type) -> None:
        assert issubclass(cls, SpaServeError)

    def test_http_errors(self) -> None:
        assert issubclass(NotFound, HTTPError)
        assert issubclass(BadRequest, HTTPError)
        assert issubclass(MethodNotAllowed, HTTPError)


class TestHTTPError:
    def test_not_found(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"
        assert str(err) == "404: Not Found"

    def test_bad_request_detail(self) -> None:
        err = BadRequest("dot segment in path")
        assert err.status == 400
        assert err.detail == "dot segment in path"

    def test_without_detail(self) -> None:
        assert str(HTTPError(status=418)) == "418"

    def test_method_not_allowed_allow_header(self) -> None:
        err = MethodNotAllowed(frozenset({"HEAD", "GET"}))
        assert err.status == 405
        assert dict(err.headers) == {"Allow": "GET, HEAD"}
        assert "GET, HEAD" in err.detail

    def test_is_raisable(self) -> None:
        with pytest.raises(NotFound):
            raise NotFound("gone")


class TestStoreErrors:
    def test_path_traversal(self) -> None:
        err = PathTraversal("../etc/passwd")
        assert err.relative == "../etc/passwd"
        assert "escapes store root" in str(err)

    def test_asset_store_error_keeps_cause(self) -> None:
        cause = PermissionError(13, "Permission denied")
        err = AssetStoreError("assets/app.js", cause)
        assert err.relative == "assets/app.js"
        assert err.cause is cause
        assert "assets/app.js" in str(err)
