"""
Recursive Regex Exception Hierarchy

Build-time errors are raised while a pattern tree is constructed and block
the tree from being created. Decode-time errors abort a single decode call
and leave nothing behind, so callers can catch them and move on.
"""
from typing import Optional


class RegexTreeError(Exception):
    """
    Base class for all recursive regex errors

    Attributes:
        message: Human-readable error message
        pattern: Pattern text involved in the failure, if known
        original_error: Original exception if wrapped
    """

    kind = "error"

    def __init__(
        self,
        message: str,
        pattern: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.pattern = pattern
        self.original_error = original_error

    def __str__(self):
        parts = [f"{self.kind}: {self.message}"]
        if self.pattern is not None:
            parts.append(f"(pattern: {self.pattern!r})")
        return " ".join(parts)


# ==================== Build errors ====================

class TreeBuildError(RegexTreeError):
    """Error raised while constructing a pattern tree"""

    kind = "build"


class PatternCompileError(TreeBuildError):
    """
    Pattern text does not compile

    Examples: unbalanced parenthesis, unknown flag name
    """

    def __init__(self, pattern: str, original_error: Optional[Exception] = None, message: Optional[str] = None):
        super().__init__(
            message=message or f"invalid regular expression: {original_error}",
            pattern=pattern,
            original_error=original_error
        )


class DuplicateChildError(TreeBuildError):
    """The same group name was registered twice on one builder"""

    def __init__(self, name: str, pattern: Optional[str] = None):
        super().__init__(
            message=f"child {name!r} is already registered",
            pattern=pattern
        )
        self.name = name


class TreeLoadError(TreeBuildError):
    """A declarative tree document is malformed"""

    kind = "load"

    def __init__(self, message: str, source: Optional[str] = None, original_error: Optional[Exception] = None):
        if source:
            message = f"{message} in {source}"
        super().__init__(message=message, original_error=original_error)
        self.source = source


# ==================== Decode errors ====================

class DecodeError(RegexTreeError):
    """
    Error raised while decoding text into a typed value

    Attributes:
        path: Location of the failing value, e.g. ``[1].nums[2]``
    """

    kind = "decode"

    def __init__(self, message: str, path: str = "", pattern: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message=message, pattern=pattern, original_error=original_error)
        self.path = path

    def __str__(self):
        text = super().__str__()
        if self.path:
            text = f"{text} at {self.path}"
        return text


class GroupUndefinedError(DecodeError):
    """A field or child names a group the pattern does not define"""

    def __init__(self, name: str, pattern: Optional[str] = None, path: str = ""):
        super().__init__(
            message=f"pattern has no named group {name!r}",
            path=path,
            pattern=pattern
        )
        self.name = name


class ArityMismatchError(DecodeError):
    """
    Number of occurrences does not fit the target shape

    Examples: zero or two matches for a scalar, two matches for an optional
    """

    def __init__(self, expected: str, found: int, pattern: Optional[str] = None, path: str = ""):
        super().__init__(
            message=f"expected {expected} but found {found} match{'' if found == 1 else 'es'}",
            path=path,
            pattern=pattern
        )
        self.expected = expected
        self.found = found


class ScalarParseError(DecodeError):
    """Matched text cannot be converted into the requested primitive"""

    def __init__(self, text: str, target: str, path: str = "", original_error: Optional[Exception] = None):
        super().__init__(
            message=f"got {text!r} but expecting {target}",
            path=path,
            original_error=original_error
        )
        self.text = text
        self.target = target
