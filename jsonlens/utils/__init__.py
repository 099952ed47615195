"""
jsonlens configuration.
"""

from .config import ExtractionSettings, TableSettings, TreeSettings, ViewerConfig

__all__ = ['ViewerConfig', 'ExtractionSettings', 'TreeSettings', 'TableSettings']
