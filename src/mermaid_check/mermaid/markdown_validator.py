"""
Document validator for embedded mermaid blocks.

Extracts fenced ```mermaid blocks from arbitrary text in a single pass and
validates each block using the heuristic MermaidValidator. The per-document
outcome is collected in a FileReport.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union

from mermaid_check.check_exceptions import CheckFileNotFoundError, CheckFileReadError
from mermaid_check.config import CheckerConfig, DEFAULT_CLOSE_FENCE, DEFAULT_OPEN_FENCE
from mermaid_check.mermaid.validator import (
    MermaidValidator,
    ValidationResult,
    validate_mermaid,
)

logger = logging.getLogger(__name__)

# ============================================================
# DATA CLASSES
# ============================================================


@dataclass(frozen=True)
class DiagramBlock:
    """A non-empty mermaid block extracted from a document."""

    start_line: int  # 1-indexed, line of opening fence
    content: str  # trimmed text between the fences


@dataclass
class FileReport:
    """Result of validating every mermaid block in one document."""

    path: Optional[str] = None
    results: list[tuple[DiagramBlock, ValidationResult]] = field(default_factory=list)

    @property
    def block_count(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> list[tuple[DiagramBlock, ValidationResult]]:
        return [(block, result) for block, result in self.results if not result.valid]

    @property
    def error_count(self) -> int:
        return len(self.failures)

    @property
    def valid(self) -> bool:
        return self.error_count == 0

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "valid": self.valid,
            "diagrams": self.block_count,
            "errors": self.error_count,
            "failures": [
                {
                    "line": block.start_line,
                    "content": block.content,
                    **result.to_dict(),
                }
                for block, result in self.failures
            ],
        }


# ============================================================
# BLOCK EXTRACTION
# ============================================================

_LINE_SPLIT = re.compile(r"\r?\n")

_BOM = "\ufeff"


def extract_mermaid_blocks(
    text: str,
    open_fence: str = DEFAULT_OPEN_FENCE,
    close_fence: str = DEFAULT_CLOSE_FENCE,
) -> Iterator[DiagramBlock]:
    """Yield mermaid blocks in order of appearance.

    A line whose trimmed value equals ``open_fence`` starts a block (and
    restarts one that is already open); the next line equal to
    ``close_fence`` ends it. Blocks that are empty after trimming and blocks
    that are never closed are dropped without error.
    """
    open_marker = open_fence.strip()
    close_marker = close_fence.strip()
    in_block = False
    start_line = 0
    block_lines: list[str] = []

    if text.startswith(_BOM):
        text = text[1:]

    for i, line in enumerate(_LINE_SPLIT.split(text)):
        stripped = line.strip()

        if stripped == open_marker:
            in_block = True
            start_line = i + 1
            block_lines = []
            continue

        if in_block and stripped == close_marker:
            in_block = False
            content = "\n".join(block_lines).strip()
            if content:
                yield DiagramBlock(start_line=start_line, content=content)
            else:
                logger.debug("Skipping empty mermaid block at line %d", start_line)
            continue

        if in_block:
            block_lines.append(line)

    if in_block:
        logger.debug("Dropping unterminated mermaid block at line %d", start_line)


# ============================================================
# DOCUMENT VALIDATION
# ============================================================


def validate_text(
    text: str,
    path: Optional[str] = None,
    config: Optional[CheckerConfig] = None,
    validator: Optional[MermaidValidator] = None,
) -> FileReport:
    """Extract and validate every mermaid block in ``text``."""
    config = config or CheckerConfig()
    check = validator.validate if validator else validate_mermaid

    report = FileReport(path=path)
    for block in extract_mermaid_blocks(text, config.open_fence, config.close_fence):
        result = check(block.content)
        logger.debug(
            "%s:%d %s diagram -> %s",
            path or "<text>",
            block.start_line,
            result.diagram_type or "unknown",
            "valid" if result.valid else result.error,
        )
        report.results.append((block, result))
    return report


def read_document(path: Union[str, Path]) -> str:
    """Read a document as UTF-8 text, dropping a leading byte order mark.

    Raises:
        CheckFileNotFoundError: if the path is missing or not a regular file
        CheckFileReadError: if the file cannot be read or decoded
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise CheckFileNotFoundError(str(path))
    try:
        # Only \n and \r\n separate lines; a lone \r stays inside its line
        return file_path.read_bytes().decode("utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CheckFileReadError(str(path), str(e)) from e


def validate_file(
    path: Union[str, Path],
    config: Optional[CheckerConfig] = None,
    validator: Optional[MermaidValidator] = None,
) -> FileReport:
    """Read ``path`` and validate every mermaid block in it."""
    text = read_document(path)
    return validate_text(text, path=str(path), config=config, validator=validator)
