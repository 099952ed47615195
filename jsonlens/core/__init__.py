"""
jsonlens core: tokenizer, document model and tree builder.
"""

from .builder import LineCounter, TreeBuilder, build, build_async
from .tokenizer import Lexer, Position, Token, TokenType
from .tree import Document

__all__ = [
    'build', 'build_async', 'TreeBuilder', 'LineCounter',
    'Lexer', 'Token', 'TokenType', 'Position',
    'Document',
]
