"""Tests for sentier.routing.generator: path rendering."""

import pytest

from sentier.errors import GenerationError
from sentier.routing.generator import decode_param, encode_param, generate_path
from sentier.routing.grammar import compile_pattern
from sentier.routing.matcher import Captures, match_pattern
from sentier.routing.tokenize import tokenize_path


class TestEncodeParam:
    def test_unreserved_untouched(self) -> None:
        assert encode_param("AZaz09-._~") == "AZaz09-._~"

    def test_sub_delims_untouched(self) -> None:
        assert encode_param("!$&'()*+,;=") == "!$&'()*+,;="

    def test_space(self) -> None:
        assert encode_param("John Doe.") == "John%20Doe."

    def test_slash_and_reserved(self) -> None:
        assert encode_param("a/b?c#d%e") == "a%2Fb%3Fc%23d%25e"

    def test_non_ascii_utf8(self) -> None:
        assert encode_param("café") == "caf%C3%A9"

    def test_decode_inverts_encode(self) -> None:
        value = "a/b c+d%é"
        assert decode_param(encode_param(value)) == value

    def test_decode_rejects_invalid_utf8(self) -> None:
        with pytest.raises(ValueError):
            decode_param("%FF")

    def test_decode_keeps_plus(self) -> None:
        assert decode_param("a+b") == "a+b"


class TestGeneratePath:
    def test_root(self) -> None:
        assert generate_path(compile_pattern("/"), {}) == "/"

    def test_hello_world(self) -> None:
        assert generate_path(compile_pattern("/hello/:name"), {"name": "world"}) == "/hello/world"

    def test_trailing_slash(self) -> None:
        assert generate_path(compile_pattern("/hello/:/"), {0: "John"}) == "/hello/John/"

    def test_anonymous_positions(self) -> None:
        pattern = compile_pattern("/color/:/:/:")
        assert generate_path(pattern, {0: "0", 1: "255", 2: "0"}) == "/color/0/255/0"

    def test_encodes_values(self) -> None:
        pattern = compile_pattern("/bonjour/:/")
        assert generate_path(pattern, {0: "John Doe"}) == "/bonjour/John%20Doe/"

    def test_encode_disabled(self) -> None:
        pattern = compile_pattern("/bonjour/:/")
        assert generate_path(pattern, {0: "John Doe"}, encode=False) == "/bonjour/John Doe/"

    def test_sub_path_appended(self) -> None:
        pattern = compile_pattern("/with-sub-route/..")
        assert generate_path(pattern, {}, sub_path="/home") == "/with-sub-route/home"

    def test_sub_path_root(self) -> None:
        pattern = compile_pattern("/s/..")
        assert generate_path(pattern, {}, sub_path="/") == "/s/"

    def test_missing_value(self) -> None:
        with pytest.raises(GenerationError, match="'name'"):
            generate_path(compile_pattern("/hello/:name"), {})

    def test_missing_sub_path(self) -> None:
        with pytest.raises(GenerationError, match="sub-route"):
            generate_path(compile_pattern("/s/..x"), {})

    @pytest.mark.parametrize(
        ("pattern", "values"),
        [("/hello/:name", {"name": ""}), ("/:", {0: ""})],
    )
    def test_empty_last_param(self, pattern: str, values: dict[str | int, str]) -> None:
        with pytest.raises(GenerationError, match="cannot be empty"):
            generate_path(compile_pattern(pattern), values)


class TestRoundTrip:
    @pytest.mark.parametrize(
        ("pattern", "path"),
        [
            ("/", "/"),
            ("/hello/:name", "/hello/world"),
            ("/hello/:/", "/hello/John%20Doe/"),
            ("/a/:x/b/:y", "/a/1/b/2"),
        ],
    )
    def test_generate_after_match(self, pattern: str, path: str) -> None:
        compiled = compile_pattern(pattern)
        captures = match_pattern(compiled, tokenize_path(path))
        assert isinstance(captures, Captures)
        decoded = {k: decode_param(v) for k, v in captures.params.items()}
        assert generate_path(compiled, decoded) == path

    def test_match_after_generate(self) -> None:
        compiled = compile_pattern("/files/:name")
        path = generate_path(compiled, {"name": "a/b c"})
        captures = match_pattern(compiled, tokenize_path(path))
        assert isinstance(captures, Captures)
        assert decode_param(captures.params["name"]) == "a/b c"

    @pytest.mark.parametrize(
        ("pattern", "values"),
        [
            ("/hello/:/", {0: ""}),
            ("/a/:x/b", {"x": ""}),
            ("/s/:x/..", {"x": ""}),
        ],
    )
    def test_empty_param_before_more_path(
        self, pattern: str, values: dict[str | int, str]
    ) -> None:
        compiled = compile_pattern(pattern)
        path = generate_path(compiled, values, sub_path="/home")
        captures = match_pattern(compiled, tokenize_path(path))
        assert isinstance(captures, Captures)
        assert list(captures.params.values()) == [""]
