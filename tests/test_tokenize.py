"""Tests for sentier.routing.tokenize: runtime path splitting."""

import pytest

from sentier.routing.tokenize import PathTokens, tokenize_path


class TestTokenizePath:
    def test_root(self) -> None:
        assert tokenize_path("/") == PathTokens((), trailing_slash=True)

    def test_single_segment(self) -> None:
        assert tokenize_path("/a") == PathTokens(("a",), trailing_slash=False)

    def test_trailing_slash(self) -> None:
        assert tokenize_path("/a/") == PathTokens(("a",), trailing_slash=True)

    def test_nested(self) -> None:
        assert tokenize_path("/a/b/c") == PathTokens(("a", "b", "c"), trailing_slash=False)

    def test_empty_interior_segment_kept(self) -> None:
        assert tokenize_path("/a//b") == PathTokens(("a", "", "b"), trailing_slash=False)

    def test_does_not_decode(self) -> None:
        assert tokenize_path("/John%20Doe").segments == ("John%20Doe",)

    def test_requires_leading_slash(self) -> None:
        with pytest.raises(ValueError, match="start with '/'"):
            tokenize_path("a/b")

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError):
            tokenize_path("")


class TestRemainder:
    def test_full_path_round_trips(self) -> None:
        for path in ("/", "/a", "/a/", "/a/b", "/a//b/"):
            assert tokenize_path(path).remainder(0) == path

    def test_tail(self) -> None:
        assert tokenize_path("/sub/x/y").remainder(1) == "/x/y"

    def test_tail_keeps_trailing_slash(self) -> None:
        assert tokenize_path("/sub/x/").remainder(1) == "/x/"

    def test_only_trailing_slash_left(self) -> None:
        assert tokenize_path("/sub/").remainder(1) == "/"

    def test_nothing_left(self) -> None:
        assert tokenize_path("/sub").remainder(1) == ""
