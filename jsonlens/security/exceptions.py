"""
Exception taxonomy for jsonlens.

ExtractionError and its subclass NothingToRenderError report a payload that is
not worth rendering. TokenStreamError reports a token stream that broke after
extraction already accepted the payload, and is never folded into the
extraction family. ShapeError is raised by the table synthesizer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.tokenizer import Position


class ExtractionReason(str, Enum):
    """Why a payload was not accepted. The value is the user-facing text."""

    INPUT_TOO_LARGE = "input too large"
    NO_JSON_START = "no JSON start found"
    NOT_VALID_JSON = "not valid JSON"
    NO_OPENING_PAREN = "no opening parenthesis"
    INVALID_FUNCTION_NAME = "first bit not a valid function name"
    NO_CLOSING_PAREN = "no closing paren"
    TRAILING_CONTENT = "trailing content after call"
    INVALID_PARAMETER = "parameter not valid JSON"
    NOT_A_CONTAINER = "technically JSON but not an object or array"
    EMPTY_CONTAINER = "empty object or array"
    NESTED_TOO_DEEPLY = "nested too deeply"


@dataclass
class ErrorContext:
    """Source excerpt around the point where a token stream failed."""

    text: str
    position: "Position"
    line_text: str
    column_indicator: str


class JsonLensError(Exception):
    """Base class for all jsonlens errors."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.position:
            msg += f" at line {self.position.line}, column {self.position.column}"
        if self.context:
            msg += f"\n\nContext:\n{self.context.line_text}\n{self.context.column_indicator}"
        return msg


class ExtractionError(JsonLensError):
    """The payload is not JSON or JSONP."""

    def __init__(self, reason: ExtractionReason):
        self.reason = reason
        super().__init__(reason.value)


class NothingToRenderError(ExtractionError):
    """The payload is valid JSON but a scalar or an empty container."""


class TokenStreamError(JsonLensError):
    """The token source or the tree builder met malformed input."""


class ShapeError(JsonLensError):
    """A table was requested for a value that is not an array."""


class SecurityError(JsonLensError):
    """A configured resource limit was exceeded."""


class ErrorReporter:
    """Builds positioned TokenStreamErrors against a source text."""

    def __init__(self, text: str):
        self.text = text
        self.lines = text.split("\n")

    def create_context(self, position: "Position") -> ErrorContext:
        line_index = position.line - 1
        line_text = self.lines[line_index] if 0 <= line_index < len(self.lines) else ""
        return ErrorContext(
            text=self.text,
            position=position,
            line_text=line_text,
            column_indicator=" " * max(position.column - 1, 0) + "^",
        )

    def create_token_error(self, message: str, position: "Position") -> TokenStreamError:
        return TokenStreamError(
            message, position=position, context=self.create_context(position)
        )
