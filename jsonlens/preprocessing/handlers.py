"""
Comment handling for the text surrounding a JSONP call.
"""

import regex  # type: ignore[import-untyped]

# A quoted string (kept), a // comment, or a /* */ comment that may run to the end
_COMMENT_OR_STRING = regex.compile(
    r"""("(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*')|//[^\n]*|/\*.*?(?:\*/|\Z)""",
    regex.DOTALL,
)


class CommentHandler:
    """Removes JavaScript comments from text."""

    @staticmethod
    def _replace(match: "regex.Match") -> str:
        if match.group(1) is not None:
            return match.group(1)
        # Line comments stop before the newline; block comments leave a space
        return "" if match.group(0).startswith("//") else " "

    @classmethod
    def remove_comments(cls, text: str) -> str:
        """Remove single-line and multi-line comments, leaving string literals alone."""
        return _COMMENT_OR_STRING.sub(cls._replace, text)
