"""Shared utilities for SDF parsing and world generation.

This module provides configuration objects, result types, the error taxonomy
and logging helpers used across all processing layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from .config import (
    AppConfig,
    ConfigError,
    ConfigValidationError,
    MazeConfig,
    ParserConfig,
    SerializerConfig,
    WorldConfig,
)
from .errors import (
    AttributeNotFoundError,
    DepthLimitError,
    DocumentClosedError,
    EmptyDocumentError,
    ErrorKind,
    MismatchedCloseTagError,
    SDFError,
    SDFIOError,
    SDFSyntaxError,
    SyntaxImbalanceError,
    TagNotFoundError,
    UnclosedTagError,
    UnexpectedTokenError,
    UnmatchedCloseTagError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "AppConfig",
    "ConfigError",
    "ConfigValidationError",
    "MazeConfig",
    "ParserConfig",
    "SerializerConfig",
    "WorldConfig",
    "AttributeNotFoundError",
    "DepthLimitError",
    "DocumentClosedError",
    "EmptyDocumentError",
    "ErrorKind",
    "MismatchedCloseTagError",
    "SDFError",
    "SDFIOError",
    "SDFSyntaxError",
    "SyntaxImbalanceError",
    "TagNotFoundError",
    "UnclosedTagError",
    "UnexpectedTokenError",
    "UnmatchedCloseTagError",
    "CorrelationLogger",
    "get_logger",
]
