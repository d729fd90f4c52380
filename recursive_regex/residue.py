"""
Text left over between the top-level matches of a pattern tree
"""
from typing import Iterator

from .matching import matched_spans
from .tree import PatternNode


def uncaptured(node: PatternNode, text: str) -> Iterator[str]:
    """
    Yield the pieces of ``text`` that no top-level match covers

    Only the root pattern is applied; children are not consulted, so this
    never fails. Pieces come in document order and empty pieces are
    skipped: text with no matches yields itself once, and text covered end
    to end by matches yields nothing. Joining the matches and the pieces in
    position order gives back ``text``.

    Useful for auditing a tree: anything yielded here was silently ignored
    by ``decode``.
    """
    position = 0
    for start, end in matched_spans(node, text):
        if start > position:
            yield text[position:start]
        position = end
    if position < len(text):
        yield text[position:]
