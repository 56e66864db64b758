"""Mermaid diagram extraction and heuristic validation."""

from mermaid_check.mermaid.validator import (
    DEFAULT_RULES,
    DiagramRule,
    MermaidValidator,
    ValidationResult,
    validate_mermaid,
)
from mermaid_check.mermaid.markdown_validator import (
    DiagramBlock,
    FileReport,
    extract_mermaid_blocks,
    read_document,
    validate_file,
    validate_text,
)

__all__ = [
    "DEFAULT_RULES",
    "DiagramBlock",
    "DiagramRule",
    "FileReport",
    "MermaidValidator",
    "ValidationResult",
    "extract_mermaid_blocks",
    "read_document",
    "validate_file",
    "validate_mermaid",
    "validate_text",
]
