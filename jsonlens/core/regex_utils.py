"""
Safe regex utilities with timeout protection.

Matching goes through the third-party ``regex`` module, whose native
``timeout`` argument bounds catastrophic backtracking on hostile input.
"""

import logging
from typing import Any, Optional

import regex  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)


def safe_regex_fullmatch(
    pattern: str, string: str, flags: int = 0, timeout: float = 0.5
) -> Optional[Any]:
    """
    Match pattern against the whole of string with timeout protection.

    Args:
        pattern: Regular expression pattern
        string: Input string to match
        flags: Regex flags
        timeout: Timeout in seconds

    Returns:
        Match object if the whole string matches, None on mismatch, timeout or error
    """
    try:
        return regex.fullmatch(pattern, string, flags=flags, timeout=timeout)
    except TimeoutError:
        logger.warning("Regex fullmatch timed out on pattern: %s", pattern[:50])
        return None
    except (regex.error, ValueError, TypeError):
        return None


# Code points 0xD800-0xDFFF; json.loads leaves unpaired ones in decoded text
_LONE_SURROGATE = regex.compile(r"[\ud800-\udfff]")


def escape_lone_surrogates(text: str) -> str:
    """Replace unpaired surrogates with their \\uXXXX escape so text stays encodable."""
    return _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)
