"""
Serialisers for built documents and table grids.
"""

from .html import render_document_html, render_grid_html, render_table_html
from .text import render_document_text, render_grid_text

__all__ = [
    'render_document_html', 'render_grid_html', 'render_table_html',
    'render_document_text', 'render_grid_text',
]
