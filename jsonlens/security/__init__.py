"""
jsonlens error taxonomy and resource limits.
"""

from .exceptions import (
    ErrorReporter,
    ExtractionError,
    ExtractionReason,
    JsonLensError,
    NothingToRenderError,
    SecurityError,
    ShapeError,
    TokenStreamError,
)
from .limits import LimitValidator

__all__ = [
    'JsonLensError', 'ExtractionError', 'ExtractionReason', 'NothingToRenderError',
    'TokenStreamError', 'ShapeError', 'SecurityError', 'ErrorReporter',
    'LimitValidator',
]
