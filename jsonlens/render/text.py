"""
Plain-text serialisation, used by the command line.

Every numbered slot or closing marker starts a new output line; everything
else is appended to the line in progress.
"""

from typing import Optional

from ..core.tree import (
    Block,
    Document,
    Marker,
    MarkerType,
    Node,
    Scalar,
    ScalarType,
    Slot,
)
from ..table.synthesizer import TableGrid

# Markers that only matter to an interactive, collapsible view
HIDDEN_MARKERS = frozenset({MarkerType.EXPANDER, MarkerType.ELLIPSIS})


class _Line:
    def __init__(self, number: Optional[int], depth: int):
        self.number = number
        self.depth = depth
        self.parts: list[str] = []


def _collect(document: Document, node: Node, depth: int, lines: list[_Line]) -> None:
    if isinstance(node, Slot):
        if node.line_number is not None:
            lines.append(_Line(node.line_number, depth))
        if node.key is not None:
            lines[-1].parts.append(node.key)
        for child in document.children(node.node_id):
            _collect(document, child, depth, lines)
    elif isinstance(node, Block):
        for child in document.children(node.node_id):
            _collect(document, child, depth + 1, lines)
    elif isinstance(node, Marker):
        if node.marker in HIDDEN_MARKERS:
            return
        if node.line_number is not None:
            lines.append(_Line(node.line_number, depth))
        lines[-1].parts.append(node.marker.text)
    elif isinstance(node, Scalar):
        text = f'"{node.text}"' if node.scalar is ScalarType.STRING else node.text
        lines[-1].parts.append(text)


def render_document_text(document: Document, indent: str = "  ") -> str:
    """Render a document as numbered, indented lines."""
    lines: list[_Line] = [_Line(None, 0)]
    _collect(document, document[document.root], 0, lines)
    lines = [line for line in lines if line.number is not None or line.parts]

    if document.wrapper_name is not None:
        opener = _Line(1, 0)
        opener.parts.append(f"{document.wrapper_name}(")
        closer = _Line(document.final_line, 0)
        closer.parts.append(")")
        lines = [opener] + lines + [closer]

    width = len(str(document.final_line))
    return "\n".join(
        f"{'' if line.number is None else line.number:>{width}}  "
        f"{indent * line.depth}{''.join(line.parts)}"
        for line in lines
    )


def render_grid_text(grid: TableGrid, separator: str = " | ") -> str:
    """Render a grid as aligned columns; message rows span the data columns."""
    rows: list[list[str]] = [list(grid.header)]
    for row in grid.rows:
        if row.cells is None:
            rows.append([str(row.index), row.message or ""])
        else:
            rows.append([str(row.index)] + [cell.text for cell in row.cells])

    widths = [0] * len(grid.header)
    for cells in rows:
        if len(cells) == len(grid.header):
            for i, text in enumerate(cells):
                widths[i] = max(widths[i], len(text))

    out = []
    for cells in rows:
        if len(cells) == len(grid.header):
            padded = (text.ljust(widths[i]) for i, text in enumerate(cells))
            out.append(separator.join(padded).rstrip())
        else:
            out.append(f"{cells[0].ljust(widths[0])}{separator}{cells[1]}")
    return "\n".join(out)
