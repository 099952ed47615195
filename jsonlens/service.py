"""
Request handling for a viewer host.

A host delivers raw text through a Request and receives Messages on a Port.
The message vocabulary is closed: NOT_JSON, FORMATTING, FORMATTED,
FORMATTING_TABLE and FORMATTED_TABLE.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional, Protocol

from .core.builder import build_async
from .preprocessing.extractors import ExtractionResult, PayloadExtractor
from .render.html import render_document_html, render_table_html
from .security.exceptions import ExtractionError
from .utils.config import ViewerConfig


class RequestKind(str, Enum):
    RENDER_FORMATTED = "RENDER FORMATTED"
    RENDER_TABLE = "RENDER TABLE"


class MessageKind(str, Enum):
    NOT_JSON = "NOT JSON"
    FORMATTING = "FORMATTING"
    FORMATTED = "FORMATTED"
    FORMATTING_TABLE = "FORMATTING TABLE"
    FORMATTED_TABLE = "FORMATTED TABLE"


class Message(NamedTuple):
    """An outbound message: its kind plus positional payload."""

    kind: MessageKind
    payload: tuple[Any, ...] = ()

    def to_list(self) -> list[Any]:
        """Wire form, e.g. ["FORMATTED", html, text]."""
        return [self.kind.value, *self.payload]


@dataclass(frozen=True)
class Request:
    kind: RequestKind
    text: str

    @classmethod
    def from_message(cls, message: dict[str, Any]) -> "Request":
        """Build a request from a {"type": ..., "text": ...} mapping."""
        try:
            kind = RequestKind(message["type"])
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Unsupported request: {message.get('type')!r}") from exc
        return cls(kind, str(message.get("text", "")))


class Port(Protocol):
    """Connection back to the requesting host."""

    def post_message(self, message: Message) -> None:
        ...

    def disconnect(self) -> None:
        ...


class FormatterService:
    """Turns render requests into the outbound message sequence."""

    def __init__(self, config: Optional[ViewerConfig] = None):
        self.config = config or ViewerConfig()
        self.extractor = PayloadExtractor(self.config)
        self.logger = self.config.get_logger(__name__)

    async def handle(self, request: Request, port: Port) -> None:
        """
        Answer one request on port.

        A payload that is not worth rendering produces NOT_JSON and closes the
        port. Build failures after a successful extraction are not reported as
        NOT_JSON; they propagate to the caller.
        """
        extracted = self._extract_or_reject(request.text, port)
        if extracted is None:
            return

        if request.kind is RequestKind.RENDER_FORMATTED:
            await self.render_formatted(extracted, port)
        else:
            self.render_table(extracted, port)

    async def render_formatted(self, extracted: ExtractionResult, port: Port) -> None:
        port.post_message(Message(MessageKind.FORMATTING, (extracted.is_array,)))
        document = await build_async(
            extracted.normalized_text, extracted.wrapper_name, self.config
        )
        html = render_document_html(document)
        port.post_message(
            Message(MessageKind.FORMATTED, (html, extracted.normalized_text))
        )

    def render_table(self, extracted: ExtractionResult, port: Port) -> None:
        port.post_message(Message(MessageKind.FORMATTING_TABLE))
        html = render_table_html(extracted.parsed_value, self.config.table)
        port.post_message(Message(MessageKind.FORMATTED_TABLE, (html,)))

    def _extract_or_reject(self, text: str, port: Port) -> Optional[ExtractionResult]:
        try:
            return self.extractor.extract(text)
        except ExtractionError as exc:
            self.logger.debug("Not JSON: %s", exc.reason.value)
            port.post_message(Message(MessageKind.NOT_JSON, (exc.reason.value,)))
            port.disconnect()
            return None
