"""
HTML serialisation of documents and table grids.

The markup mirrors what the viewer's stylesheet expects: a line-number
gutter followed by #formattedJson, whose rows carry ``line-number``
attributes, and a plain <table> for the grid view.
"""

from html import escape
from typing import Any, Optional

from ..core.tree import (
    Block,
    Document,
    Marker,
    MarkerType,
    Node,
    Scalar,
    ScalarType,
    Slot,
    SlotRole,
)
from ..security.exceptions import ShapeError
from ..table.synthesizer import TableGrid, TableRow, TableSynthesizer
from ..utils.config import TableSettings

SLOT_CLASSES = {
    SlotRole.ROOT: "keyValueOrValue rootKeyValueOrValue",
    SlotRole.ELEMENT: "keyValueOrValue arrayElement",
    SlotRole.PROPERTY: "keyValueOrValue objectProperty",
}

MARKER_CLASSES = {
    MarkerType.EXPANDER: "expander",
    MarkerType.OPEN_BRACE: "openingBrace",
    MarkerType.CLOSE_BRACE: "closingBrace",
    MarkerType.OPEN_BRACKET: "openingBracket",
    MarkerType.CLOSE_BRACKET: "closingBracket",
    MarkerType.ELLIPSIS: "ellipsis",
    MarkerType.COMMA: "comma",
    MarkerType.COLON: "colon",
}


def _line_attr(line_number: Optional[int]) -> str:
    return "" if line_number is None else f' line-number="{line_number}"'


def _render_scalar(node: Scalar) -> str:
    if node.scalar is ScalarType.STRING:
        text = escape(node.text)
        inner = f'<a href="{text}">{text}</a>' if node.link else text
        return f'<span class="string">"<span>{inner}</span>"</span>'
    return f'<span class="{node.scalar.value}">{escape(node.text)}</span>'


def _render_node(document: Document, node: Node) -> str:
    if isinstance(node, Scalar):
        return _render_scalar(node)
    if isinstance(node, Marker):
        return (
            f'<span class="{MARKER_CLASSES[node.marker]}"{_line_attr(node.line_number)}>'
            f"{escape(node.marker.text)}</span>"
        )

    inner = "".join(_render_node(document, child) for child in document.children(node.node_id))
    if isinstance(node, Block):
        return f'<div class="blockInner {node.container.value}">{inner}</div>'

    assert isinstance(node, Slot)
    key = f'<span class="key">{escape(node.key)}</span>' if node.key is not None else ""
    return (
        f'<div class="{SLOT_CLASSES[node.role]}"{_line_attr(node.line_number)}>'
        f"{key}{inner}</div>"
    )


def render_document_html(document: Document) -> str:
    """Serialise a built document with its gutter and any JSONP opener/closer."""
    width = f"{document.gutter_width:g}rem"
    body = _render_node(document, document[document.root])

    if document.wrapper_name is not None:
        body = (
            f'<div id="jsonpOpener" line-number="1">{escape(document.wrapper_name)}(</div>'
            f"{body}"
            f'<div id="jsonpCloser" line-number="{document.final_line}">)</div>'
        )

    return (
        f'<div id="gutter" style="width: {width}"></div>'
        f'<div id="formattedJson" style="margin-left: {width}">{body}</div>'
    )


def _render_row(row: TableRow, grid: TableGrid) -> str:
    index_cell = f"<td>{row.index}</td>"
    if row.cells is None:
        message = escape(row.message or "")
        return (
            f'<tr>{index_cell}<td class="unexpected" colspan="{grid.data_width}">'
            f"{message}</td></tr>"
        )
    cells = "".join(
        f'<td class="{cell.kind.value}" title="{escape(cell.text)}">{escape(cell.text)}</td>'
        for cell in row.cells
    )
    return f"<tr>{index_cell}{cells}</tr>"


def render_grid_html(grid: TableGrid) -> str:
    header = "".join(f'<th class="key">{escape(name)}</th>' for name in grid.header)
    rows = "".join(_render_row(row, grid) for row in grid.rows)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{rows}</tbody></table>"


def render_table_html(value: Any, settings: Optional[TableSettings] = None) -> str:
    """Render a parsed value as a table, or the fallback block when it is not an array."""
    try:
        grid = TableSynthesizer(settings).synthesize(value)
    except ShapeError as exc:
        return f"<div>{escape(exc.message)}</div>"
    return render_grid_html(grid)
