"""
Configuration for jsonlens extraction, tree building and table synthesis.

Settings are grouped into small dataclasses and aggregated by ViewerConfig,
which also exposes the most used fields as flat properties.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ExtractionSettings:
    """Settings for locating a JSON payload in raw text."""
    allow_jsonp: bool = True
    max_input_size: int = 10 * 1024 * 1024
    regex_timeout: float = 0.5


@dataclass
class TreeSettings:
    """Settings for building the document tree."""
    link_prefix: str = "http"
    max_nesting_depth: int = 512
    yield_every: int = 1000


@dataclass
class TableSettings:
    """Texts used when rendering a table grid."""
    absent_text: str = "—"
    unexpected_array_text: str = "Unexpected array"
    unexpected_value_text: str = "Unexpected value"
    not_array_text: str = "JSON is not an Array"


@dataclass
class ViewerConfig:
    """Configuration options for jsonlens."""

    extraction: ExtractionSettings = field(default_factory=ExtractionSettings)
    tree: TreeSettings = field(default_factory=TreeSettings)
    table: TableSettings = field(default_factory=TableSettings)
    logger: Optional[logging.Logger] = None

    def __init__(
        self,
        *,
        extraction: Optional[ExtractionSettings] = None,
        tree: Optional[TreeSettings] = None,
        table: Optional[TableSettings] = None,
        logger: Optional[logging.Logger] = None,
        **options: Any,  # flat shortcuts, e.g. allow_jsonp=False
    ):
        self.extraction = extraction or ExtractionSettings(
            allow_jsonp=options.get('allow_jsonp', True),
            max_input_size=options.get('max_input_size', 10 * 1024 * 1024),
            regex_timeout=options.get('regex_timeout', 0.5),
        )
        self.tree = tree or TreeSettings(
            link_prefix=options.get('link_prefix', "http"),
            max_nesting_depth=options.get('max_nesting_depth', 512),
            yield_every=options.get('yield_every', 1000),
        )
        self.table = table or TableSettings()
        self.logger = logger

        if self.extraction.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.extraction.regex_timeout <= 0:
            raise ValueError("regex_timeout must be positive")
        if self.tree.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")
        if self.tree.yield_every <= 0:
            raise ValueError("yield_every must be positive")

    def get_logger(self, name: str) -> logging.Logger:
        """Return the configured logger, or the module logger for name."""
        return self.logger or logging.getLogger(name)

    @property
    def allow_jsonp(self) -> bool:
        """Whether JSONP-wrapped payloads are accepted."""
        return self.extraction.allow_jsonp

    @property
    def max_input_size(self) -> int:
        """Maximum raw input size in characters."""
        return self.extraction.max_input_size

    @property
    def link_prefix(self) -> str:
        """Prefix that marks a decoded string value as a hyperlink."""
        return self.tree.link_prefix

    @property
    def max_nesting_depth(self) -> int:
        """Maximum container nesting accepted by the tree builder."""
        return self.tree.max_nesting_depth
