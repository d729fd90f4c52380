"""
Target shapes for decoding

A shape tells the decoder how many matches a value takes and how to turn
them into Python objects. Shapes are usually inferred from type hints with
``shape_of``, but a class can declare its own by defining a
``__regex_shape__`` classmethod that returns a ``Shape``.
"""
import collections.abc
import dataclasses
import enum
import types
import typing
from abc import ABC
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel

from .config import settings
from .spanned import Spanned


def parse_bool(text: str) -> bool:
    word = text.strip().lower()
    if word in {v.lower() for v in settings.bool_true_values}:
        return True
    if word in {v.lower() for v in settings.bool_false_values}:
        return False
    raise ValueError(f"not a boolean word: {text!r}")


def parse_enum(enum_cls: typing.Type[enum.Enum]) -> Callable[[str], enum.Enum]:
    """Parser that finds a member by value, then by name"""
    def parse(text: str) -> enum.Enum:
        for member in enum_cls:
            if str(member.value) == text:
                return member
        try:
            return enum_cls[text]
        except KeyError:
            raise ValueError(f"{text!r} is not a member of {enum_cls.__name__}") from None
    return parse


SCALAR_PARSERS: Dict[type, Callable[[str], Any]] = {
    str: str,
    int: int,
    float: float,
    bool: parse_bool,
    Decimal: Decimal,
}


class Shape(ABC):
    """Base class of all target shapes"""


@dataclass
class ScalarShape(Shape):
    """
    Exactly one match, converted from its text by ``parser``

    ``name`` defaults to the parser's ``__name__``.
    """
    parser: Callable[[str], Any] = str
    name: Optional[str] = None

    def __post_init__(self):
        if self.name is None:
            self.name = getattr(self.parser, "__name__", "value")


@dataclass
class UnitShape(Shape):
    """Consumes nothing and decodes to ``None``, whatever matched"""
    name: str = "None"


@dataclass
class OptionalShape(Shape):
    """Zero or one match"""
    inner: Shape = field(default_factory=ScalarShape)

    @property
    def name(self) -> str:
        return f"optional {self.inner.name}"


@dataclass
class SequenceShape(Shape):
    """Any number of matches, each decoded as ``element``"""
    element: Shape = field(default_factory=ScalarShape)
    container: Callable[[List[Any]], Any] = list

    @property
    def name(self) -> str:
        return f"sequence of {self.element.name}"


@dataclass
class TupleShape(Shape):
    """Exactly ``len(elements)`` matches, decoded positionally"""
    elements: List[Shape] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"tuple of {len(self.elements)}"


@dataclass
class FieldSpec:
    """
    A record field and the named group it reads

    A field with ``has_default`` is left out of the factory call when its
    group did not match, so the record's own default applies.
    """
    group: str
    shape: Shape
    has_default: bool = False


@dataclass
class RecordShape(Shape):
    """
    Exactly one match whose named groups fill the fields

    ``factory`` is called with one keyword argument per field.
    """
    factory: Callable[..., Any] = dict
    fields: Dict[str, FieldSpec] = field(default_factory=dict)
    name: str = "record"


@dataclass
class MapShape(Shape):
    """
    Exactly one match, decoded as a mapping of group name to value

    Every named group of the pattern that took part in the match becomes a
    key, in pattern order; each value is decoded as ``value``.
    """
    value: Shape = field(default_factory=ScalarShape)
    container: Callable[[Dict[str, Any]], Any] = dict

    @property
    def name(self) -> str:
        return f"map of {self.value.name}"


@dataclass
class SpannedShape(Shape):
    """Exactly one match, decoded as ``inner`` and tagged with its span"""
    inner: Shape = field(default_factory=ScalarShape)

    @property
    def name(self) -> str:
        return f"spanned {self.inner.name}"


def shape_of(target: Any, _records: Optional[Dict[Any, RecordShape]] = None) -> Shape:
    """
    Infer the shape for a target type

    Args:
        target: A ``Shape``, a scalar type, a typing generic such as
            ``List[int]``, ``Optional[str]`` or ``Dict[str, int]``,
            ``Spanned[T]``, ``None``, or a record class (dataclass,
            NamedTuple, TypedDict, pydantic model)

    Returns:
        Shape describing the target

    Raises:
        TypeError: if no shape can be inferred
    """
    if isinstance(target, Shape):
        return target

    if _records is None:
        _records = {}

    hook = getattr(target, "__regex_shape__", None)
    if callable(hook):
        declared = hook()
        if not isinstance(declared, Shape):
            raise TypeError(f"{target!r}.__regex_shape__() must return a Shape, got {declared!r}")
        return declared

    if target is None or target is type(None):
        return UnitShape()

    if target in SCALAR_PARSERS:
        return ScalarShape(SCALAR_PARSERS[target], target.__name__)

    if isinstance(target, type) and issubclass(target, enum.Enum):
        return ScalarShape(parse_enum(target), target.__name__)

    origin = typing.get_origin(target)
    args = typing.get_args(target)

    if origin is Union or origin is types.UnionType:
        present = [a for a in args if a is not type(None)]
        if len(present) == 1 and len(args) == 2:
            return OptionalShape(shape_of(present[0], _records))
        raise TypeError(f"only Optional unions can be decoded, got {target!r}")

    if target is list or origin in (list, collections.abc.Sequence, collections.abc.Iterable):
        element = shape_of(args[0], _records) if args else ScalarShape()
        return SequenceShape(element, list)

    if target is tuple or origin is tuple:
        if not args or (len(args) == 2 and args[1] is Ellipsis):
            element = shape_of(args[0], _records) if args else ScalarShape()
            return SequenceShape(element, tuple)
        return TupleShape([shape_of(a, _records) for a in args])

    if target is dict or origin in (dict, collections.abc.Mapping):
        if args and args[0] is not str:
            raise TypeError(f"map keys are group names and must be str, got {target!r}")
        return MapShape(shape_of(args[1], _records) if args else ScalarShape())

    if target is Spanned or origin is Spanned:
        return SpannedShape(shape_of(args[0], _records) if args else ScalarShape())

    if isinstance(target, type):
        record = _record_shape(target, _records)
        if record is not None:
            return record

    raise TypeError(f"cannot infer a decode shape for {target!r}")


def _record_shape(cls: type, records: Dict[Any, RecordShape]) -> Optional[RecordShape]:
    if cls in records:
        return records[cls]

    # (attribute, group, type hint, has a default)
    if dataclasses.is_dataclass(cls):
        hints = typing.get_type_hints(cls)
        declared = [
            (
                f.name,
                f.metadata.get("group", f.name),
                hints.get(f.name, str),
                f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING,
            )
            for f in dataclasses.fields(cls) if f.init
        ]
    elif issubclass(cls, BaseModel):
        declared = [
            (name, name, info.annotation, not info.is_required())
            for name, info in cls.model_fields.items()
        ]
    elif issubclass(cls, tuple) and hasattr(cls, "_fields"):
        hints = typing.get_type_hints(cls)
        declared = [
            (name, name, hints.get(name, str), name in cls._field_defaults)
            for name in cls._fields
        ]
    elif typing.is_typeddict(cls):
        hints = typing.get_type_hints(cls)
        declared = [
            (name, name, hint, name in cls.__optional_keys__)
            for name, hint in hints.items()
        ]
    else:
        return None

    # Registered before the fields so self-referencing classes terminate
    shape = RecordShape(factory=cls, name=cls.__name__)
    records[cls] = shape
    for attr, group, hint, has_default in declared:
        shape.fields[attr] = FieldSpec(group, shape_of(hint, records), has_default)
    return shape
