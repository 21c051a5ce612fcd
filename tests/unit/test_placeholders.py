"""Unit tests for ##key## placeholder substitution."""

import pytest

from latexcompile.contexts.templating.placeholders import (
    PlaceholderEngine,
    find_placeholders,
    substitute,
    validate_dictionary,
)
from latexcompile.exceptions import EncodingError


@pytest.mark.unit
class TestSubstitute:
    """Tests for substitute()."""

    def test_plain_text_unchanged(self):
        assert substitute(b"plain text", {}) == b"plain text"

    def test_known_key_replaced(self):
        assert substitute(b"##test##", {"test": "Minimal"}) == b"Minimal"

    def test_unknown_key_removed(self):
        assert substitute(b"a##missing##b", {}) == b"ab"

    def test_unknown_key_removed_with_non_empty_dictionary(self):
        assert substitute(b"a##missing##b", {"other": "x"}) == b"ab"

    def test_latex_document(self):
        content = b"\\begin{document}##test##\\end{document}"
        result = substitute(content, {"test": "Minimal"})
        assert result == b"\\begin{document}Minimal\\end{document}"

    def test_multiple_and_repeated_keys(self):
        content = b"##name## (##role##), signed ##name##"
        result = substitute(content, {"name": "Ada", "role": "Engineer"})
        assert result == b"Ada (Engineer), signed Ada"

    def test_adjacent_tokens(self):
        assert substitute(b"##a####b##", {"a": "1", "b": "2"}) == b"12"

    def test_closing_delimiter_does_not_open_next_match(self):
        assert substitute(b"##a##b##", {"a": "X", "b": "Y"}) == b"Xb##"

    def test_invalid_key_characters_left_alone(self):
        content = b"##not a key## and ##also.not##"
        assert substitute(content, {"also": "x"}) == content

    def test_hyphen_and_underscore_keys(self):
        result = substitute(b"##first-name## ##last_name##", {"first-name": "Ada", "last_name": "Lovelace"})
        assert result == b"Ada Lovelace"

    def test_value_may_contain_delimiters(self):
        # Replacement values are not expanded again
        assert substitute(b"##a##", {"a": "##b##", "b": "no"}) == b"##b##"

    def test_non_ascii_text_preserved(self):
        content = "Grüße, ##name##!".encode("utf-8")
        result = substitute(content, {"name": "Zoë"})
        assert result == "Grüße, Zoë!".encode("utf-8")

    def test_binary_without_delimiters_passthrough(self):
        content = bytes(range(256)) * 4
        assert substitute(content, {"a": "b"}) == content

    def test_invalid_utf8_buffer_returned_unmodified(self):
        content = b"\x89PNG\r\n\x1a\n\xff\xfe##test##\x00"
        assert substitute(content, {"test": "Minimal"}) == content

    def test_empty_content(self):
        assert substitute(b"", {"a": "b"}) == b""


@pytest.mark.unit
class TestPlaceholderEngine:
    """Tests for PlaceholderEngine."""

    def test_dictionary_is_copied(self):
        values = {"a": "1"}
        engine = PlaceholderEngine(values)
        values["a"] = "2"
        assert engine.substitute(b"##a##") == b"1"

    def test_none_dictionary(self):
        assert PlaceholderEngine(None).substitute(b"x##a##y") == b"xy"

    def test_unencodable_value_raises_when_used(self):
        engine = PlaceholderEngine({"bad": "\ud800"})
        with pytest.raises(EncodingError) as excinfo:
            engine.substitute(b"##bad##")
        assert excinfo.value.key == "bad"

    def test_unencodable_value_ignored_when_unused(self):
        engine = PlaceholderEngine({"bad": "\ud800", "good": "ok"})
        assert engine.substitute(b"##good##") == b"ok"


@pytest.mark.unit
class TestValidateDictionary:
    """Tests for validate_dictionary()."""

    def test_valid_keys(self):
        assert validate_dictionary({"a-b_C9": "x"}) == {"a-b_C9": "x"}

    @pytest.mark.parametrize("key", ["with space", "dot.key", "", "ümlaut", "#hash"])
    def test_invalid_keys_rejected(self, key):
        with pytest.raises(ValueError):
            validate_dictionary({key: "x"})

    def test_non_string_value_rejected(self):
        with pytest.raises(TypeError):
            validate_dictionary({"count": 3})


@pytest.mark.unit
class TestFindPlaceholders:
    """Tests for find_placeholders()."""

    def test_distinct_keys_in_order(self):
        assert find_placeholders(b"##b## ##a## ##b##") == ["b", "a"]

    def test_no_placeholders(self):
        assert find_placeholders(b"plain") == []

    def test_binary_buffer(self):
        assert find_placeholders(b"\xff##a##") == []
