"""
Deserialization engine: decodes a match tree into the values a target
shape asks for

Cardinality rules per shape:

- scalar, record, spanned: exactly one occurrence
- optional: zero or one occurrence
- sequence: any number of occurrences, in match order
- tuple: exactly as many occurrences as the tuple has elements
- map: exactly one occurrence, keyed by the groups that took part in it
- unit: anything, including nothing

A named group that did not take part in a match behaves like zero
occurrences, so only optional and sequence fields, and fields the record
gives a default, may be absent.
"""
from typing import Any, Sequence

from .exceptions import ArityMismatchError, DecodeError, GroupUndefinedError, ScalarParseError
from .logger import get_logger
from .matching import Occurrence, match
from .shapes import (
    MapShape,
    OptionalShape,
    RecordShape,
    ScalarShape,
    SequenceShape,
    Shape,
    SpannedShape,
    TupleShape,
    UnitShape,
    shape_of,
)
from .spanned import Spanned
from .tree import PatternNode

logger = get_logger(__name__)


def decode(node: PatternNode, text: str, target: Any) -> Any:
    """
    Decode ``text`` with a pattern tree into a value of the target shape

    Args:
        node: Pattern tree to match with
        text: Text to parse
        target: A ``Shape`` or a type to infer one from (``List[int]``,
            a dataclass, ``Optional[Spanned[str]]``, ...)

    Returns:
        The decoded value

    Raises:
        DecodeError: on the first arity, parse or undefined-group failure;
            no partial result is returned

    Example:
        >>> decode(leaf(r"\\d+"), "1 2 456", List[int])
        [1, 2, 456]
    """
    shape = shape_of(target)
    try:
        return Decoder().decode(shape, match(node, text))
    except DecodeError as e:
        logger.debug(f"Decoding {node!r} as {shape.name} failed: {e}")
        raise


class Decoder:
    """Walks occurrences together with a shape"""

    def decode(self, shape: Shape, occurrences: Sequence[Occurrence], path: str = "") -> Any:
        if isinstance(shape, UnitShape):
            return None

        if isinstance(shape, OptionalShape):
            if not occurrences:
                return None
            if len(occurrences) > 1:
                raise ArityMismatchError("at most one match", len(occurrences), path=path)
            return self.decode(shape.inner, occurrences, path)

        if isinstance(shape, SequenceShape):
            return shape.container([
                self.decode(shape.element, [occurrence], f"{path}[{i}]")
                for i, occurrence in enumerate(occurrences)
            ])

        if isinstance(shape, TupleShape):
            if len(occurrences) != len(shape.elements):
                raise ArityMismatchError(
                    f"exactly {len(shape.elements)} matches", len(occurrences), path=path
                )
            return tuple(
                self.decode(element, [occurrence], f"{path}[{i}]")
                for i, (element, occurrence) in enumerate(zip(shape.elements, occurrences))
            )

        if len(occurrences) != 1:
            raise ArityMismatchError(
                f"exactly one match for {shape.name}", len(occurrences), path=path
            )
        occurrence = occurrences[0]

        if isinstance(shape, ScalarShape):
            return self.parse_scalar(shape, occurrence.text, path)

        if isinstance(shape, SpannedShape):
            value = self.decode(shape.inner, occurrences, path)
            return Spanned(value, occurrence.start, occurrence.end)

        if isinstance(shape, RecordShape):
            return self.decode_record(shape, occurrence, path)

        if isinstance(shape, MapShape):
            return self.decode_map(shape, occurrence, path)

        raise TypeError(f"unsupported shape {shape!r}")

    def decode_record(self, shape: RecordShape, occurrence: Occurrence, path: str) -> Any:
        values = {}
        for attr, field_spec in shape.fields.items():
            field_path = f"{path}.{attr}" if path else attr
            if field_spec.group not in occurrence.groups:
                raise GroupUndefinedError(field_spec.group, path=field_path)
            nested = occurrence.groups[field_spec.group]
            if nested is None and field_spec.has_default:
                continue
            values[attr] = self.decode(field_spec.shape, nested or (), field_path)
        return shape.factory(**values)

    def decode_map(self, shape: MapShape, occurrence: Occurrence, path: str) -> Any:
        values = {}
        for name, nested in occurrence.groups.items():
            if nested is None:
                continue
            values[name] = self.decode(shape.value, nested, f"{path}.{name}" if path else name)
        return shape.container(values)

    @staticmethod
    def parse_scalar(shape: ScalarShape, text: str, path: str) -> Any:
        try:
            return shape.parser(text)
        except (ValueError, TypeError, ArithmeticError, KeyError) as e:
            raise ScalarParseError(text, shape.name, path, e) from e
