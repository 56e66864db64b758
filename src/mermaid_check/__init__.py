"""
mermaid-check - offline heuristic checks for Mermaid diagrams

Extracts fenced ```mermaid blocks from text files and applies per-diagram-type
plausibility checks without invoking a rendering engine.
"""

__version__ = "0.1.0"

from .check_exceptions import (
    MermaidCheckError,
    UsageError,
    CheckFileError,
    CheckFileNotFoundError,
    CheckFileReadError,
    RendererUnavailableError,
)
from .config import CheckerConfig
from .mermaid import (
    DiagramBlock,
    FileReport,
    MermaidValidator,
    ValidationResult,
    extract_mermaid_blocks,
    validate_file,
    validate_mermaid,
    validate_text,
)

__all__ = [
    "__version__",
    "CheckerConfig",
    "CheckFileError",
    "CheckFileNotFoundError",
    "CheckFileReadError",
    "DiagramBlock",
    "FileReport",
    "MermaidCheckError",
    "MermaidValidator",
    "RendererUnavailableError",
    "UsageError",
    "ValidationResult",
    "extract_mermaid_blocks",
    "validate_file",
    "validate_mermaid",
    "validate_text",
]
