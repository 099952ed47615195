"""
Tabular projection of top-level JSON arrays.
"""

from .synthesizer import Cell, CellKind, TableGrid, TableRow, TableSynthesizer, synthesize

__all__ = ['synthesize', 'TableSynthesizer', 'TableGrid', 'TableRow', 'Cell', 'CellKind']
