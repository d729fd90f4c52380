"""
Tests for the matching engine
"""
import pytest

from recursive_regex import GroupUndefinedError, Occurrence, leaf, match, root


class TestMatch:
    """Tests for match()"""

    def test_leaf_occurrences_in_document_order(self):
        occurrences = match(leaf(r"\d+"), "1 2 456")

        assert [o.text for o in occurrences] == ["1", "2", "456"]
        assert [o.span for o in occurrences] == [(0, 1), (2, 3), (4, 7)]
        assert all(isinstance(o, Occurrence) for o in occurrences)

    def test_no_match_gives_no_occurrences(self):
        assert match(leaf(r"\d+"), "none here") == []

    def test_empty_matches_advance(self):
        occurrences = match(leaf(r"x*"), "ab")

        assert [o.span for o in occurrences] == [(0, 0), (1, 1), (2, 2)]

    def test_child_recurses_into_captured_text(self):
        node = (
            root(r"(?P<name>[A-Z][a-z]+) (?P<numbers>[-\d ]*)")
            .with_child("numbers", leaf(r"-?\d+"))
            .build()
        )

        [occurrence] = match(node, "Ying -24 42 123987")

        numbers = occurrence.groups["numbers"]
        assert [o.text for o in numbers] == ["-24", "42", "123987"]

    def test_group_without_child_is_a_single_literal(self):
        node = root(r"(?P<name>[A-Z][a-z]+) (?P<rest>.*)").build()

        [occurrence] = match(node, "Ying has opinions")

        [name] = occurrence.groups["name"]
        assert name.text == "Ying"
        assert name.span == (0, 4)
        assert dict(name.groups) == {}

    def test_absent_group_is_none(self):
        node = root(r"(?P<key>\w+)(?:=(?P<value>\d+))?").build()

        first, second = match(node, "a=1 b")

        assert first.groups["value"][0].text == "1"
        assert second.groups["value"] is None

    def test_spans_are_absolute_through_recursion(self):
        tags = leaf(r"[a-z]+")
        node = root(r"Tags: (?P<tags>.*)").with_child("tags", tags).build()

        [occurrence] = match(node, "xx\nTags: musical, historical")

        assert [o.span for o in occurrence.groups["tags"]] == [(9, 16), (18, 28)]

    def test_offset_argument(self):
        [occurrence] = match(leaf(r"b"), "ab", offset=10)

        assert occurrence.span == (11, 12)

    def test_child_for_unknown_group_fails_on_first_match(self):
        node = root(r"(?P<a>\d+)").with_child("b", leaf(r"\d")).build()

        with pytest.raises(GroupUndefinedError) as exc_info:
            match(node, "123")

        assert exc_info.value.name == "b"
        assert exc_info.value.pattern == r"(?P<a>\d+)"

    def test_three_levels(self):
        pair = root(r"(?P<flag>true|false) (?P<strength>\d+)").build()
        opinions = root(r"(?P<opinions>.+)").with_child(
            "opinions", root(r"(?P<pair>\w+ \d+)").with_child("pair", pair).build()
        ).build()

        [occurrence] = match(opinions, "true 3 false 10")

        pairs = occurrence.groups["opinions"]
        assert len(pairs) == 2
        [inner] = pairs[1].groups["pair"]
        assert inner.groups["flag"][0].text == "false"
        assert inner.groups["strength"][0].span == (13, 15)
