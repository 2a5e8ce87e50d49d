"""
dataModel.py

This module defines the data models used throughout P69.
The models leverage Pydantic for validation and type safety.

Features:
- Located token records produced by the scanner
- Tagged token map values consumed by the resolver
- Rewrite options and the error sink protocol
- Results of file processing and style preprocessing

Usage:
Import these models to validate and structure data used in the application.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, Self, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from p69.config.settings import appsettings

TokenMap: TypeAlias = Mapping[str, Any]


class ValueKind(Enum):
    """
    Enum for the kind of value stored under a token map key.
    """

    LITERAL = 1
    MAP = 2
    CALLABLE = 3


@dataclass(frozen=True)
class TokenValue:
    """A value found in a token map, tagged with its kind.

    Attributes:
        kind: Whether the value is a literal, a nested map or a callable
        value: The raw value as stored in the token map
    """

    kind: ValueKind
    value: Any

    @classmethod
    def of(cls, raw: Any) -> "TokenValue":
        """Tag a raw token map value."""
        if callable(raw):
            return cls(ValueKind.CALLABLE, raw)
        if isinstance(raw, Mapping):
            return cls(ValueKind.MAP, raw)
        return cls(ValueKind.LITERAL, raw)


class Token(BaseModel):
    """A placeholder located in source text.

    Attributes:
        path: Key path segments, e.g. ("color", "base") for `$color.base`
        args: Literal call arguments, or None when no argument list was written
        suffix: Characters trailing the token, re-attached after substitution
        start: Offset of the `$` sigil
        end: Offset just past the path and argument list
    """

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = Field(..., min_length=1)
    args: Optional[tuple[Any, ...]] = None
    suffix: str = ""
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    @model_validator(mode="after")
    def span_check(self: Self) -> Self:
        if self.end < self.start:
            raise ValueError(f"Token end {self.end} precedes start {self.start}")
        return self

    @property
    def dotted(self: Self) -> str:
        """The key path as written, e.g. `color.base`."""
        return ".".join(self.path)

    @property
    def span_end(self: Self) -> int:
        """Offset just past the suffix."""
        return self.end + len(self.suffix)


class ErrorSink(Protocol):
    """Receives per-token failures during a rewrite.

    Implementations report and return. Raising from the sink stops the whole
    rewrite.
    """

    def __call__(self, error: Exception, token: Token, options: "Options") -> None:
        ...


class Options(BaseModel):
    """Options for a single rewrite.

    Attributes:
        reference: Advisory label printed alongside reported errors
        error_if_missing: Report tokens that no token map defines
        on_error: Sink for per-token failures; the default prints a report
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    reference: Optional[str] = Field(default_factory=lambda: appsettings.reference)
    error_if_missing: bool = Field(
        default_factory=lambda: appsettings.errorIfMissing
    )
    on_error: Optional[Callable[..., None]] = None


class FilesResult(BaseModel):
    """Result of processing a tree of source files.

    Attributes:
        status: False when listing failed or any file failed
        processed: Source files rewritten successfully
        failed: Source files that could not be processed
        message: Optional context about a failure
    """

    status: bool
    processed: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    message: Optional[str] = None


class StyleResult(BaseModel):
    """Result returned to the host build tool for one style block."""

    code: str


@dataclass
class PreprocessorState:
    """Mutable state owned by one preprocessor instance.

    Attributes:
        primed: Whether the source tree has already been processed
    """

    primed: bool = False
