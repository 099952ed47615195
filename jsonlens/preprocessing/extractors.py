"""
Payload extraction.

This module decides whether raw text holds a JSON or JSONP document worth
rendering, and if so returns the normalized JSON text, its parsed value and
the JSONP function name.
"""

import json
from dataclasses import dataclass
from typing import Any, NoReturn, Optional

from ..core.constants import JSON_KEYWORDS, VALUE_START_CHARS
from ..core.regex_utils import safe_regex_fullmatch
from ..security.exceptions import (
    ExtractionError,
    ExtractionReason,
    NothingToRenderError,
    SecurityError,
)
from ..security.limits import LimitValidator
from ..utils.config import ViewerConfig
from .handlers import CommentHandler

# A bare or dotted/bracketed property access, e.g. cb, a.b, a["b"], $_x
JSONP_NAME_PATTERN = r"[a-zA-Z_$][.\[\]'\"0-9a-zA-Z_$]*"


@dataclass(frozen=True)
class ExtractionResult:
    """A validated payload: a non-empty object or array."""

    parsed_value: Any
    normalized_text: str
    wrapper_name: Optional[str] = None

    @property
    def is_array(self) -> bool:
        return isinstance(self.parsed_value, list)


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not valid JSON")


def strict_parse(text: str) -> tuple[bool, Any]:
    """Parse text as standard JSON. Returns (ok, value)."""
    try:
        return True, json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return False, None


def find_json_start(text: str) -> int:
    """Index of the first character that can begin a JSON value, or -1."""
    for i, char in enumerate(text):
        if char in VALUE_START_CHARS:
            return i
        if char in "tfn" and text.startswith(JSON_KEYWORDS, i):
            return i
    return -1


def find_bracket_start(text: str) -> int:
    """Index of the first { or [, or -1."""
    indexes = [i for i in (text.find("{"), text.find("[")) if i != -1]
    return min(indexes, default=-1)


class PayloadExtractor:
    """Locates a JSON payload in raw text, unwrapping JSONP when needed."""

    def __init__(self, config: Optional[ViewerConfig] = None):
        self.config = config or ViewerConfig()
        self.limits = LimitValidator(self.config)
        self.logger = self.config.get_logger(__name__)

    def extract(self, text: str) -> ExtractionResult:
        """
        Extract the JSON payload from text.

        Raises:
            ExtractionError: text is not JSON or JSONP
            NothingToRenderError: text is JSON, but a scalar or an empty container
        """
        try:
            self.limits.validate_input_size(text)
        except SecurityError as exc:
            self.logger.debug("Rejecting payload: %s", exc.message)
            raise ExtractionError(ExtractionReason.INPUT_TOO_LARGE) from exc

        start = find_json_start(text)
        if start == -1:
            raise ExtractionError(ExtractionReason.NO_JSON_START)

        stripped = text[start:]
        ok, value = strict_parse(stripped)
        if not ok:
            # Preambles such as while(1); contain digits; retry from the first bracket
            bracket = find_bracket_start(text)
            if bracket > start:
                ok, value = strict_parse(text[bracket:])
                if ok:
                    stripped = text[bracket:]
        if ok:
            result = ExtractionResult(value, stripped)
        elif self.config.allow_jsonp:
            result = self.unwrap_jsonp(text)
        else:
            raise ExtractionError(ExtractionReason.NOT_VALID_JSON)

        self._check_renderable(result.parsed_value)
        try:
            self.limits.validate_nesting_depth(result.parsed_value)
        except SecurityError as exc:
            self.logger.debug("Rejecting payload: %s", exc.message)
            raise ExtractionError(ExtractionReason.NESTED_TOO_DEEPLY) from exc

        self.logger.debug(
            "Extracted %s payload (%d chars)%s",
            "array" if result.is_array else "object",
            len(result.normalized_text),
            f" wrapped in {result.wrapper_name}()" if result.wrapper_name else "",
        )
        return result

    def unwrap_jsonp(self, text: str) -> ExtractionResult:
        """Treat text as a JSONP call and extract its single JSON argument."""
        text = text.strip()

        open_index = text.find("(")
        if open_index == -1:
            raise ExtractionError(ExtractionReason.NO_OPENING_PAREN)

        name = CommentHandler.remove_comments(text[:open_index]).strip()
        if not safe_regex_fullmatch(
            JSONP_NAME_PATTERN, name, timeout=self.config.extraction.regex_timeout
        ):
            raise ExtractionError(ExtractionReason.INVALID_FUNCTION_NAME)

        close_index = text.rfind(")")
        if close_index < open_index:
            raise ExtractionError(ExtractionReason.NO_CLOSING_PAREN)

        tail = CommentHandler.remove_comments(text[close_index + 1:]).strip()
        if tail not in ("", ";"):
            raise ExtractionError(ExtractionReason.TRAILING_CONTENT)

        argument = text[open_index + 1:close_index]
        ok, value = strict_parse(argument)
        if not ok:
            raise ExtractionError(ExtractionReason.INVALID_PARAMETER)

        return ExtractionResult(value, argument, name)

    def _check_renderable(self, value: Any) -> None:
        if not isinstance(value, (dict, list)):
            self.logger.debug("Rejecting payload: scalar %s", type(value).__name__)
            raise NothingToRenderError(ExtractionReason.NOT_A_CONTAINER)
        if not value:
            self.logger.debug("Rejecting payload: empty %s", type(value).__name__)
            raise NothingToRenderError(ExtractionReason.EMPTY_CONTAINER)


def extract(text: str, config: Optional[ViewerConfig] = None) -> ExtractionResult:
    """Extract a renderable JSON payload from text. See PayloadExtractor.extract."""
    return PayloadExtractor(config).extract(text)
