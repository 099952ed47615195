"""
Resource limits applied while extracting payloads and building trees.
"""

from collections.abc import Iterable
from typing import Any

from ..utils.config import ViewerConfig
from .exceptions import SecurityError


class LimitValidator:
    """
    Guards one extraction or build against oversized input and deep nesting.

    A validator is stateful: the tree builder calls enter_structure() for
    every opened container and exit_structure() when it closes.
    """

    def __init__(self, config: ViewerConfig):
        self.max_input_size = config.max_input_size
        self.max_nesting_depth = config.max_nesting_depth
        self.nesting_depth = 0

    def validate_input_size(self, text: str) -> None:
        size = len(text)
        if size > self.max_input_size:
            raise SecurityError(f"Input size {size} exceeds limit {self.max_input_size}")

    def validate_nesting_depth(self, value: Any) -> None:
        """Check a parsed value against the depth limit before any tree is built."""
        depth = nesting_depth(value)
        if depth > self.max_nesting_depth:
            raise SecurityError(
                f"Nesting depth {depth} exceeds limit {self.max_nesting_depth}"
            )

    def enter_structure(self) -> None:
        """Count one more open container; raise once past the configured depth."""
        depth = self.nesting_depth + 1
        if depth > self.max_nesting_depth:
            raise SecurityError(
                f"Nesting depth {depth} exceeds limit {self.max_nesting_depth}"
            )
        self.nesting_depth = depth

    def exit_structure(self) -> None:
        self.nesting_depth = max(self.nesting_depth - 1, 0)

    def reset(self) -> None:
        self.nesting_depth = 0


def nesting_depth(value: Any) -> int:
    """Deepest container nesting in a parsed JSON value; scalars have depth 0."""
    deepest = 0
    stack = [(value, 1)]
    while stack:
        item, depth = stack.pop()
        children: Iterable[Any]
        if isinstance(item, dict):
            children = item.values()
        elif isinstance(item, list):
            children = item
        else:
            continue
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in children)
    return deepest

