"""
jsonlens - find the JSON in a payload and lay it out for reading.

jsonlens takes raw text that may hold a JSON or JSONP document and produces
a line-numbered, collapsible document tree, or a table when the document is
an array.

Quick Start:
    import jsonlens

    result = jsonlens.extract('callback({"name": "jsonlens", "tags": ["a"]});')
    result.wrapper_name          # 'callback'
    document = jsonlens.build(result.normalized_text, result.wrapper_name)
    print(jsonlens.render_document_text(document))

    grid = jsonlens.synthesize([{"a": 1}, {"b": 2}])
    grid.header                  # ['', 'a', 'b']

Payloads that are not worth rendering raise ExtractionError; scalars and
empty containers raise its subclass NothingToRenderError.
"""

from .core.builder import TreeBuilder, build, build_async
from .core.tree import Document
from .preprocessing.extractors import ExtractionResult, PayloadExtractor, extract
from .render.html import render_document_html, render_table_html
from .render.text import render_document_text, render_grid_text
from .security.exceptions import (
    ExtractionError,
    ExtractionReason,
    JsonLensError,
    NothingToRenderError,
    SecurityError,
    ShapeError,
    TokenStreamError,
)
from .service import FormatterService, Message, MessageKind, Request, RequestKind
from .table.synthesizer import TableGrid, synthesize
from .utils.config import ExtractionSettings, TableSettings, TreeSettings, ViewerConfig

__version__ = "0.1.0"
__author__ = "jsonlens contributors"

__all__ = [
    # Core operations
    "extract", "build", "build_async", "synthesize",
    # Rendering
    "render_document_html", "render_table_html", "render_document_text", "render_grid_text",
    # Results and builders
    "ExtractionResult", "PayloadExtractor", "Document", "TreeBuilder", "TableGrid",
    # Host integration
    "FormatterService", "Request", "RequestKind", "Message", "MessageKind",
    # Configuration classes
    "ViewerConfig", "ExtractionSettings", "TreeSettings", "TableSettings",
    # Exception classes
    "JsonLensError", "ExtractionError", "ExtractionReason", "NothingToRenderError",
    "TokenStreamError", "ShapeError", "SecurityError",
]
