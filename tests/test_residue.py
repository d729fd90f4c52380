"""
Tests for uncaptured text extraction
"""
import types

import pytest

from recursive_regex import leaf, match, root, uncaptured


def rebuild(node, text):
    """Interleave matched text and residue pieces by position"""
    residue = iter(uncaptured(node, text))
    pieces = []
    position = 0
    for occurrence in match(node, text):
        if occurrence.start > position:
            pieces.append(next(residue))
        pieces.append(occurrence.text)
        position = occurrence.end
    if position < len(text):
        pieces.append(next(residue))
    assert next(residue, None) is None
    return "".join(pieces)


class TestUncaptured:
    """Tests for uncaptured()"""

    def test_numbers_without_sign_handling(self):
        node = (
            root(r"(?P<nums>[\d\s]*) (?P<yn>true|false)")
            .with_child("nums", leaf(r"\d+"))
            .build()
        )

        residue = list(uncaptured(node, "1 2 456 true\n8 3 -54 false\n"))

        assert residue == ["\n8 3 -", "\n"]

    def test_zero_matches_yield_whole_text(self):
        assert list(uncaptured(leaf(r"\d+"), "no digits here")) == ["no digits here"]

    def test_full_coverage_yields_nothing(self):
        assert list(uncaptured(leaf(r"\w"), "abc")) == []

    def test_leading_between_and_trailing(self):
        assert list(uncaptured(leaf(r"\d+"), "a1bb22c")) == ["a", "bb", "c"]

    def test_empty_text(self):
        assert list(uncaptured(leaf(r"\d+"), "")) == []

    def test_children_are_not_consulted(self):
        node = root(r"(?P<a>\d+)").with_child("undefined", leaf("x")).build()

        assert list(uncaptured(node, "x12y")) == ["x", "y"]

    def test_is_lazy_and_single_pass(self):
        residue = uncaptured(leaf(r"\d"), "a1b")

        assert isinstance(residue, types.GeneratorType)
        assert next(residue) == "a"
        assert list(residue) == ["b"]
        assert list(residue) == []

    @pytest.mark.parametrize("pattern,text", [
        (r"\d+", "1 2 456 true\n8 3 -54 false\n"),
        (r"\d*", "a1b22"),
        (r"[a-z]+", "Hello, World!"),
        (r"x", "xxxx"),
        (r"nope", "nothing matches"),
    ])
    def test_matches_and_residue_rebuild_text(self, pattern, text):
        assert rebuild(leaf(pattern), text) == text
