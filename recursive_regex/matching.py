"""
Matching engine: applies a pattern tree to text and returns the match tree
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple

from .exceptions import GroupUndefinedError
from .tree import PatternNode


@dataclass(frozen=True)
class Occurrence:
    """
    One non-overlapping match of a node's pattern

    ``start``/``end`` are offsets into the text handed to the top-level
    ``match`` call. ``groups`` has an entry for every named group: ``None``
    when the group did not take part in the match, otherwise the occurrences
    found inside the captured text (a single literal occurrence when the
    group has no child node).
    """
    text: str
    start: int
    end: int
    groups: Mapping[str, Optional[Tuple["Occurrence", ...]]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def span(self) -> Tuple[int, int]:
        return self.start, self.end


def match(node: PatternNode, text: str, offset: int = 0) -> List[Occurrence]:
    """
    Match ``node`` against ``text``, recursing into children

    Args:
        node: Pattern tree to apply
        text: Text to search
        offset: Position of ``text`` within the original text, added to spans

    Returns:
        Occurrences in document order

    Raises:
        GroupUndefinedError: if a child is registered under a name that is
            not a named group of its parent's pattern
    """
    groupindex = node.pattern.groupindex
    for name in node.children:
        if name not in groupindex:
            raise GroupUndefinedError(name, node.pattern.pattern)

    occurrences = []
    for m in node.pattern.finditer(text):
        groups = {}
        for name in groupindex:
            start, end = m.span(name)
            if start < 0:
                groups[name] = None
                continue
            captured = m.group(name)
            child = node.children.get(name)
            if child is None:
                groups[name] = (Occurrence(captured, offset + start, offset + end),)
            else:
                groups[name] = tuple(match(child, captured, offset + start))

        occurrences.append(Occurrence(
            text=m.group(0),
            start=offset + m.start(),
            end=offset + m.end(),
            groups=MappingProxyType(groups)
        ))

    return occurrences


def matched_spans(node: PatternNode, text: str) -> Iterator[Tuple[int, int]]:
    """Spans of the top-level matches only; children are not consulted"""
    return (m.span() for m in node.pattern.finditer(text))
