"""
Payload extraction.

Finds the JSON document inside raw text, unwrapping JSONP calls, and rejects
payloads that are not worth rendering.
"""

from .extractors import ExtractionResult, PayloadExtractor, extract
from .handlers import CommentHandler

__all__ = [
    "ExtractionResult",
    "PayloadExtractor",
    "extract",
    "CommentHandler",
]
