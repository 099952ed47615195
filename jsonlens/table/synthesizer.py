"""
Array-to-table synthesis.

Columns are discovered in one pass over the top-level array before any row
is produced: object keys in first-seen order when any element is an object
(named-column mode), otherwise positions up to the longest element array
(indexed-column mode).
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..core.regex_utils import escape_lone_surrogates
from ..security.exceptions import ShapeError
from ..utils.config import TableSettings

_ABSENT = object()


class CellKind(Enum):
    NULL = "null"
    ABSENT = "undefined"
    BOOL = "bool"
    STRING = "string"
    NUMBER = "number"
    DEEP = "deep"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    text: str


@dataclass
class TableRow:
    """One data row: either aligned cells or a message spanning all data columns."""

    index: int
    cells: Optional[list[Cell]] = None
    message: Optional[str] = None

    @property
    def is_message(self) -> bool:
        return self.cells is None


@dataclass
class TableGrid:
    header: list[str]
    rows: list[TableRow] = field(default_factory=list)
    named_columns: bool = False

    @property
    def data_width(self) -> int:
        """Number of data columns (the row-index column excluded)."""
        return len(self.header) - 1


def render_cell(value: Any, settings: Optional[TableSettings] = None) -> Cell:
    """Render one table value. Nested containers are not expanded."""
    settings = settings or TableSettings()
    if value is _ABSENT:
        return Cell(CellKind.ABSENT, settings.absent_text)
    if value is None:
        return Cell(CellKind.NULL, "null")
    if isinstance(value, list):
        return Cell(CellKind.DEEP, "array")
    if isinstance(value, dict):
        return Cell(CellKind.DEEP, "object")
    if isinstance(value, bool):
        return Cell(CellKind.BOOL, "true" if value else "false")
    if isinstance(value, str):
        return Cell(CellKind.STRING, escape_lone_surrogates(value))
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        # Integral floats print without a fraction, as in JavaScript
        return Cell(CellKind.NUMBER, str(int(value)))
    if isinstance(value, (int, float)):
        return Cell(CellKind.NUMBER, json.dumps(value))
    raise TypeError(f"Unexpected type: {type(value).__name__} ({value!r})")


class TableSynthesizer:
    """Projects a JSON array onto an aligned grid."""

    def __init__(self, settings: Optional[TableSettings] = None):
        self.settings = settings or TableSettings()

    def synthesize(self, value: Any) -> TableGrid:
        if not isinstance(value, list):
            raise ShapeError(self.settings.not_array_text)

        key_index: dict[str, int] = {}
        max_length = 0
        named_columns = False
        for item in value:
            if isinstance(item, dict):
                named_columns = True
                for key in item:
                    key_index.setdefault(key, len(key_index))
            elif isinstance(item, list):
                max_length = max(max_length, len(item))

        if named_columns:
            columns = list(key_index)
        else:
            columns = [str(i) for i in range(max_length)]

        grid = TableGrid(header=[""] + columns, named_columns=named_columns)
        for row_index, item in enumerate(value):
            grid.rows.append(self._row(row_index, item, key_index, grid))
        return grid

    def _row(
        self, row_index: int, item: Any, key_index: dict[str, int], grid: TableGrid
    ) -> TableRow:
        if isinstance(item, dict):
            values: list[Any] = [_ABSENT] * grid.data_width
            for key, cell_value in item.items():
                values[key_index[key]] = cell_value
        elif isinstance(item, list):
            if grid.named_columns:
                return TableRow(row_index, message=self.settings.unexpected_array_text)
            values = item + [_ABSENT] * (grid.data_width - len(item))
        else:
            return TableRow(row_index, message=self.settings.unexpected_value_text)

        return TableRow(row_index, cells=[render_cell(v, self.settings) for v in values])


def synthesize(value: Any, settings: Optional[TableSettings] = None) -> TableGrid:
    """Project a parsed JSON array onto a table grid. Raises ShapeError otherwise."""
    return TableSynthesizer(settings).synthesize(value)
