"""
Common constants and mappings used across jsonlens.
"""

# Import here to avoid circular imports
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokenizer import TokenType

# Characters that may open a JSON value, besides the keywords below
VALUE_START_CHARS = frozenset('{["-0123456789')

JSON_KEYWORDS = ("true", "false", "null")

# Glyph text of each structural marker kind
MARKER_TEXT = {
    "expander": "",
    "open-brace": "{",
    "close-brace": "}",
    "open-bracket": "[",
    "close-bracket": "]",
    "ellipsis": "…",
    "comma": ",",
    "colon": ": ",
}


# Token type mapping for structural characters
def get_structural_token_map() -> dict[str, "TokenType"]:
    """Get the mapping of structural characters to TokenType enums."""
    # Import here to avoid circular imports
    from .tokenizer import TokenType  # pylint: disable=import-outside-toplevel

    return {
        "{": TokenType.BEGIN_OBJECT,
        "}": TokenType.END_OBJECT,
        "[": TokenType.BEGIN_ARRAY,
        "]": TokenType.END_ARRAY,
        ":": TokenType.END_LABEL,
        ",": TokenType.COMMA,
    }


def classify_number(literal: str) -> "TokenType":
    """Pick the numeric token sub-variant for a number literal."""
    from .tokenizer import TokenType  # pylint: disable=import-outside-toplevel

    lowered = literal.lower()
    if "e" in lowered:
        if "e-" in lowered:
            return TokenType.EXPONENTIAL_NUMBER_NEGATIVE
        return TokenType.EXPONENTIAL_NUMBER
    if "." in literal:
        return TokenType.DECIMAL_NUMBER
    if literal.startswith("-"):
        return TokenType.NEGATIVE_NUMBER
    return TokenType.NUMBER
