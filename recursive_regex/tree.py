"""
Pattern trees: compiled patterns with child patterns keyed by group name
"""
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Union

from .config import settings
from .exceptions import DuplicateChildError, PatternCompileError
from .logger import get_logger

logger = get_logger(__name__)

PatternLike = Union[str, "re.Pattern[str]"]


def compile_pattern(pattern: PatternLike, flags: Optional[int] = None) -> "re.Pattern[str]":
    """
    Compile a pattern eagerly

    Args:
        pattern: Pattern text, or an already compiled pattern (used as-is)
        flags: ``re`` flags; the configured default flags when omitted

    Returns:
        Compiled pattern

    Raises:
        PatternCompileError: if the pattern does not compile
    """
    if isinstance(pattern, re.Pattern):
        return pattern

    if flags is None:
        flags = settings.regex_flags

    try:
        return re.compile(pattern, flags)
    except re.error as e:
        logger.debug(f"Failed to compile pattern {pattern!r}: {e}")
        raise PatternCompileError(pattern, e) from e
    except TypeError as e:
        raise PatternCompileError(str(pattern), e, message=f"pattern must be text: {e}") from e


@dataclass(frozen=True, eq=False)
class PatternNode:
    """
    A compiled pattern plus child nodes keyed by named group

    Once the pattern matches, every named group that has a child is matched
    again by that child, so the tree can be arbitrarily deep::

        (?P<name>\\w+) (?P<numbers>[-\\d ]*)
                              |
                           -?\\d+

    Groups without a child are left as literal text. Nodes are immutable;
    build them with ``leaf`` or ``root(...).with_child(...).build()``.
    """
    pattern: "re.Pattern[str]"
    children: Mapping[str, "PatternNode"] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def group_names(self) -> List[str]:
        """Named groups of the pattern, in group order"""
        return sorted(self.pattern.groupindex, key=self.pattern.groupindex.get)

    def child(self, name: str) -> Optional["PatternNode"]:
        return self.children.get(name)

    def depth(self) -> int:
        """Number of levels in the tree; a leaf has depth 1"""
        return 1 + max((c.depth() for c in self.children.values()), default=0)

    def __repr__(self):
        if self.children:
            return f"PatternNode({self.pattern.pattern!r}, children={sorted(self.children)})"
        return f"PatternNode({self.pattern.pattern!r})"


class Builder:
    """
    Collects children for a node under construction

    Example:
        tree = (
            root(r"Title: (?P<title>.*)\\nTags: (?P<tags>.*)")
            .with_child("tags", leaf(r"[a-z]+"))
            .build()
        )
    """

    def __init__(self, pattern: "re.Pattern[str]"):
        self._pattern = pattern
        self._children: Dict[str, PatternNode] = {}

    def with_child(self, name: str, child: PatternNode) -> "Builder":
        """Register ``child`` to run on the text captured by group ``name``"""
        if name in self._children:
            raise DuplicateChildError(name, self._pattern.pattern)
        if not isinstance(child, PatternNode):
            raise TypeError(f"child {name!r} must be a PatternNode, got {type(child).__name__}")
        self._children[name] = child
        return self

    def build(self) -> PatternNode:
        """Finish construction; the node keeps its own copy of the children"""
        node = PatternNode(self._pattern, MappingProxyType(dict(self._children)))
        logger.debug(f"Built {node!r}")
        return node


def leaf(pattern: PatternLike, flags: Optional[int] = None) -> PatternNode:
    """Construct a node with no children"""
    return PatternNode(compile_pattern(pattern, flags))


def root(pattern: PatternLike, flags: Optional[int] = None) -> Builder:
    """Begin construction of a node with children"""
    return Builder(compile_pattern(pattern, flags))
