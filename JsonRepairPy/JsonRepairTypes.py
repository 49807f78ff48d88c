from enum import Enum
from typing import Generic, TypeVar

from .JsonRepairHeuristics import PathPatterns

class JsonRepairErrorKind(Enum):
    UNEXPECTED_END = 0
    OBJECT_KEY_EXPECTED = 1
    COLON_EXPECTED = 2
    INVALID_CHARACTER = 3
    UNEXPECTED_CHARACTER = 4
    INVALID_UNICODE = 5
    NESTING_TOO_DEEP = 6

class JsonRepairError(ValueError):
    # The human-readable description of the failure.
    message: str
    # The code point offset into the original input.
    position: int
    # The kind of failure.
    kind: JsonRepairErrorKind

    def __init__(self, message: str, position: int, kind: JsonRepairErrorKind) -> None:
        super().__init__(f"{message} at position {position}")
        self.message = message
        self.position = position
        self.kind = kind

    def __repr__(self) -> str:
        return f"JsonRepairError({self.kind.name}, {self.message!r}, position={self.position})"

T = TypeVar("T")
E = TypeVar("E")

class JsonRepairResult(Generic[T, E]):
    is_error: bool
    value_or_none: T | None
    error_or_none: E | None

    def __init__(self, is_error: bool, value_or_none: T | None = None, error_or_none: E | None = None):
        self.is_error = is_error
        self.value_or_none = value_or_none
        self.error_or_none = error_or_none

    @staticmethod
    def from_value(value: T) -> "JsonRepairResult[T, E]":
        return JsonRepairResult(False, value_or_none=value)

    @staticmethod
    def from_error(error: E) -> "JsonRepairResult[T, E]":
        return JsonRepairResult(True, error_or_none=error)

    def __bool__(self) -> bool:
        return not self.is_error

    def value(self) -> T:
        if self.is_error:
            raise RuntimeError(f"Result was error: {self.error_or_none}")
        return self.value_or_none

    def error(self) -> E:
        if not self.is_error:
            raise RuntimeError(f"Result was value: {self.value_or_none}")
        return self.error_or_none

    def __repr__(self) -> str:
        if self.is_error:
            return f"error ({self.error_or_none!r})"
        return f"value ({self.value_or_none!r})"

class JsonRepairOptions:
    # Whether to strip leading/trailing whitespace inside strings and object keys.
    trim_whitespace: bool
    # Whether the input holds one value per line.
    newline_delimited: bool
    # The deepest nesting of values accepted before giving up.
    max_depth: int
    # The word lists used to recognise file paths in strings.
    path_patterns: PathPatterns | None

    def __init__(
        self,
        trim_whitespace: bool = False,
        newline_delimited: bool = False,
        max_depth: int = 200,
        path_patterns: PathPatterns | None = None,
    ) -> None:
        """
        Constructs options for a repair. All fields are optional.
        """
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.trim_whitespace = trim_whitespace
        self.newline_delimited = newline_delimited
        self.max_depth = max_depth
        self.path_patterns = path_patterns
