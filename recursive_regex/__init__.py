"""
Recursive Regex

Parses almost-structured text (hand-kept logs, homework files, loose data
dumps) by applying regular expressions recursively: whenever a pattern
matches, each named group that has a child pattern is matched again by that
child. The resulting match tree is decoded into typed values.

Quick Start:
    from dataclasses import dataclass
    from typing import List
    from recursive_regex import root, leaf, decode, uncaptured

    @dataclass
    class Line:
        nums: List[int]
        yn: bool

    tree = (
        root(r"(?P<nums>[-\\d\\s]*) (?P<yn>true|false)")
        .with_child("nums", leaf(r"-?\\d+"))
        .build()
    )

    text = "1 2 456 true\\n8 3 -54 false\\n"
    lines = decode(tree, text, List[Line])

    # Anything the tree did not match
    leftovers = list(uncaptured(tree, text))
"""

from .exceptions import (
    RegexTreeError,
    TreeBuildError,
    PatternCompileError,
    DuplicateChildError,
    TreeLoadError,
    DecodeError,
    GroupUndefinedError,
    ArityMismatchError,
    ScalarParseError,
)

from .tree import PatternNode, Builder, leaf, root
from .matching import Occurrence, match
from .shapes import (
    Shape,
    ScalarShape,
    OptionalShape,
    SequenceShape,
    TupleShape,
    RecordShape,
    FieldSpec,
    SpannedShape,
    MapShape,
    UnitShape,
    shape_of,
)
from .spanned import Spanned
from .decoding import decode
from .residue import uncaptured
from .loader import TreeLoader, load_tree, load_tree_from_string, tree_from_dict, dump_tree

__all__ = [
    # Errors
    "RegexTreeError",
    "TreeBuildError",
    "PatternCompileError",
    "DuplicateChildError",
    "TreeLoadError",
    "DecodeError",
    "GroupUndefinedError",
    "ArityMismatchError",
    "ScalarParseError",

    # Trees
    "PatternNode",
    "Builder",
    "leaf",
    "root",

    # Matching
    "Occurrence",
    "match",

    # Decoding
    "Shape",
    "ScalarShape",
    "OptionalShape",
    "SequenceShape",
    "TupleShape",
    "RecordShape",
    "FieldSpec",
    "SpannedShape",
    "MapShape",
    "UnitShape",
    "shape_of",
    "Spanned",
    "decode",

    # Residue
    "uncaptured",

    # Declarative trees
    "TreeLoader",
    "load_tree",
    "load_tree_from_string",
    "tree_from_dict",
    "dump_tree",
]
