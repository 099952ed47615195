"""
Tree builder - folds a token sequence into a line-numbered Document.

The builder keeps one cursor (a node id in the document arena) and one line
counter. Both belong to a single build; nothing is shared between builds.
"""

import json
from collections.abc import Iterable
from typing import Callable, Optional

from ..security.exceptions import TokenStreamError
from ..security.limits import LimitValidator
from ..utils.config import ViewerConfig
from .regex_utils import escape_lone_surrogates
from .tokenizer import NUMBER_TYPES, Lexer, Token, TokenType, iter_tokens_async
from .tree import (
    Block,
    ContainerType,
    Document,
    Marker,
    MarkerType,
    Node,
    Scalar,
    ScalarType,
    Slot,
    SlotRole,
)

CLOSE_TYPES = frozenset({TokenType.END_OBJECT, TokenType.END_ARRAY})

OPEN_MARKERS = {
    ContainerType.OBJECT: MarkerType.OPEN_BRACE,
    ContainerType.ARRAY: MarkerType.OPEN_BRACKET,
}

CLOSE_MARKERS = {
    ContainerType.OBJECT: MarkerType.CLOSE_BRACE,
    ContainerType.ARRAY: MarkerType.CLOSE_BRACKET,
}


class LineCounter:
    """Monotonic line counter, seeded past the JSONP opener when there is one."""

    def __init__(self, wrapped: bool = False):
        self.value = 2 if wrapped else 1

    def take(self) -> int:
        """Return the next line number and advance."""
        number = self.value
        self.value += 1
        return number


class TreeBuilder:
    """Builds a Document from tokens, one token at a time."""

    def __init__(
        self, wrapper_name: Optional[str] = None, config: Optional[ViewerConfig] = None
    ):
        self.config = config or ViewerConfig()
        self.document = Document(wrapper_name)
        self.lines = LineCounter(wrapped=wrapper_name is not None)
        self.cursor = self.document.root
        self.limits = LimitValidator(self.config)
        self.logger = self.config.get_logger(__name__)
        self._finished = False

        handlers: dict[TokenType, Callable[[Token], None]] = {
            TokenType.COMMA: self._on_comma,
            TokenType.END_LABEL: self._on_end_label,
            TokenType.BEGIN_OBJECT: self._on_begin,
            TokenType.BEGIN_ARRAY: self._on_begin,
            TokenType.END_OBJECT: self._on_end_object,
            TokenType.END_ARRAY: self._on_end_array,
            TokenType.STRING: self._on_string,
            TokenType.MAYBE_STRING: self._on_string,
            TokenType.NULL: self._on_null,
            TokenType.BOOLEAN: self._on_boolean,
            TokenType.SYMBOL: self._on_symbol,
        }
        for number_type in NUMBER_TYPES:
            handlers[number_type] = self._on_number
        missing = set(TokenType) - set(handlers)
        assert not missing, f"unhandled token types: {missing}"
        self._handlers = handlers

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    @property
    def current(self) -> Node:
        return self.document[self.cursor]

    def _is_block(self, container: ContainerType) -> bool:
        node = self.current
        return isinstance(node, Block) and node.container is container

    def _is_slot(self, role: Optional[SlotRole] = None) -> bool:
        node = self.current
        return isinstance(node, Slot) and (role is None or node.role is role)

    def _ascend(self, token: Token) -> None:
        parent = self.current.parent
        if parent is None:
            raise TokenStreamError(
                f"Unbalanced {token.type.value} token", position=token.position
            )
        self.cursor = parent

    def _append(self, node: Node) -> None:
        self.document.append_child(self.cursor, self.document.add(node))

    def _append_marker(self, marker: MarkerType) -> Marker:
        node = Marker(self.document.new_id(), marker)
        self._append(node)
        return node

    def _append_scalar(self, scalar: ScalarType, text: str, link: bool = False) -> None:
        self._append(Scalar(self.document.new_id(), scalar, text, link=link))

    def _open_slot(self, role: SlotRole, key: Optional[str] = None) -> None:
        slot = Slot(self.document.new_id(), role, key=key, line_number=self.lines.take())
        self._append(slot)
        self.cursor = slot.node_id

    # ------------------------------------------------------------------
    # Token handling
    # ------------------------------------------------------------------

    def feed(self, token: Token) -> None:
        """Apply one token to the tree."""
        if self._finished:
            raise TokenStreamError("Token received after end of input", position=token.position)

        if self._is_block(ContainerType.ARRAY) and token.type not in CLOSE_TYPES:
            self._open_slot(SlotRole.ELEMENT)

        self._handlers[token.type](token)

    def feed_all(self, tokens: Iterable[Token]) -> "TreeBuilder":
        for token in tokens:
            self.feed(token)
        return self

    def finish(self) -> Document:
        """Close the build. The cursor must be back at the root."""
        if self.cursor != self.document.root:
            raise TokenStreamError("Unexpected end of input: unclosed container")
        self._finished = True
        self.document.final_line = self.lines.value
        self.logger.debug(
            "Built document: %d nodes, %d lines",
            len(self.document.nodes),
            self.lines.value - 1,
        )
        return self.document

    def _on_comma(self, token: Token) -> None:
        self._append_marker(MarkerType.COMMA)
        if self._is_slot():
            self._ascend(token)

    def _on_end_label(self, token: Token) -> None:
        self._append_marker(MarkerType.COLON)

    def _on_begin(self, token: Token) -> None:
        if not self._is_slot():
            raise TokenStreamError(
                f"Unexpected {token.type.value} token", position=token.position
            )
        self.limits.enter_structure()

        slot = self.current
        assert isinstance(slot, Slot)
        if slot.line_number is None:
            slot.line_number = self.lines.take()

        container = (
            ContainerType.OBJECT
            if token.type is TokenType.BEGIN_OBJECT
            else ContainerType.ARRAY
        )
        self._append_marker(MarkerType.EXPANDER)
        self._append_marker(OPEN_MARKERS[container])
        self._append_marker(MarkerType.ELLIPSIS)

        block = Block(self.document.new_id(), container)
        self._append(block)
        self.cursor = block.node_id

    def _on_end_object(self, token: Token) -> None:
        if self._is_slot(SlotRole.PROPERTY):
            self._ascend(token)
        self._close(ContainerType.OBJECT, token)

    def _on_end_array(self, token: Token) -> None:
        if self._is_slot(SlotRole.ELEMENT):
            self._ascend(token)
        self._close(ContainerType.ARRAY, token)

    def _close(self, container: ContainerType, token: Token) -> None:
        if not self._is_block(container):
            raise TokenStreamError(
                f"Unexpected {token.type.value} token", position=token.position
            )
        block = self.current
        assert isinstance(block, Block)
        self._ascend(token)
        self.limits.exit_structure()

        closing = self._append_marker(CLOSE_MARKERS[container])
        if block.children:
            closing.line_number = self.lines.take()
        else:
            self._prune_empty(block)

    def _prune_empty(self, block: Block) -> None:
        """Drop an empty body along with its slot's expander and ellipsis."""
        self.document.detach(block.node_id)
        for child in self.document.children(self.cursor):
            if isinstance(child, Marker) and child.marker in (
                MarkerType.EXPANDER,
                MarkerType.ELLIPSIS,
            ):
                self.document.detach(child.node_id)

    def _on_string(self, token: Token) -> None:
        if self._is_block(ContainerType.OBJECT):
            self._open_slot(SlotRole.PROPERTY, key=token.value)
            return

        try:
            content = json.loads(token.value)
        except ValueError as exc:
            raise TokenStreamError(
                f"Undecodable string literal: {exc}", position=token.position
            ) from exc
        if not isinstance(content, str):
            raise TokenStreamError("Expected a string literal", position=token.position)

        escaped = escape_lone_surrogates(json.dumps(content, ensure_ascii=False)[1:-1])
        link = content.startswith(self.config.link_prefix)
        self._append_scalar(ScalarType.STRING, escaped, link=link)

    def _on_null(self, token: Token) -> None:
        self._append_scalar(ScalarType.NULL, token.value)

    def _on_boolean(self, token: Token) -> None:
        self._append_scalar(ScalarType.BOOLEAN, token.value)

    def _on_number(self, token: Token) -> None:
        self._append_scalar(ScalarType.NUMBER, token.value)

    def _on_symbol(self, token: Token) -> None:
        self._append_scalar(ScalarType.SYMBOL, token.value)


def build(
    text: str, wrapper_name: Optional[str] = None, config: Optional[ViewerConfig] = None
) -> Document:
    """Build the document tree for already-validated JSON text."""
    builder = TreeBuilder(wrapper_name, config)
    return builder.feed_all(Lexer(text).tokenize()).finish()


async def build_async(
    text: str, wrapper_name: Optional[str] = None, config: Optional[ViewerConfig] = None
) -> Document:
    """
    Coroutine form of build().

    Tokens are consumed as the lexer produces them, yielding to the event loop
    between batches. The coroutine returns once the token stream is exhausted;
    any TokenStreamError propagates to the awaiting caller.
    """
    builder = TreeBuilder(wrapper_name, config)
    async for token in iter_tokens_async(text, builder.config.tree.yield_every):
        builder.feed(token)
    return builder.finish()
