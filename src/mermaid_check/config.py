"""
mermaid-check Configuration.

Configuration dataclass and environment variable support. There is no
configuration file: defaults are overridden by environment variables, which
are in turn overridden by command-line flags.

::: This is-in-layer Infrastructure-Layer.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional
import os


# =============================================================================
# Default Values
# =============================================================================

DEFAULT_OPEN_FENCE = "```mermaid"
DEFAULT_CLOSE_FENCE = "```"
DEFAULT_RENDERER_COMMAND = "mmdc"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name)
    return Path(value) if value else None


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class CheckerConfig:
    """Configuration for a mermaid-check run.

    ::: This is-in-layer Infrastructure-Layer.
    ::: This is a value-object.
    ::: This is stateless.

    Supports environment variables:
    - MERMAID_CHECK_OPEN_FENCE: Line that opens a diagram block (default: ```mermaid)
    - MERMAID_CHECK_CLOSE_FENCE: Line that closes a diagram block (default: ```)
    - MERMAID_CHECK_RENDERER: Renderer executable to probe for (default: mmdc)
    - MERMAID_CHECK_REQUIRE_RENDERER: Fail the run when the renderer is missing (default: false)
    - MERMAID_CHECK_LOG_FILE: Also write debug logs to this file (default: unset)
    """

    # Fence markers, compared against trimmed lines
    open_fence: str = field(default_factory=lambda: os.environ.get("MERMAID_CHECK_OPEN_FENCE", DEFAULT_OPEN_FENCE))
    close_fence: str = field(default_factory=lambda: os.environ.get("MERMAID_CHECK_CLOSE_FENCE", DEFAULT_CLOSE_FENCE))

    # Renderer probe
    renderer_command: str = field(default_factory=lambda: os.environ.get("MERMAID_CHECK_RENDERER", DEFAULT_RENDERER_COMMAND))
    require_renderer: bool = field(default_factory=lambda: _env_bool("MERMAID_CHECK_REQUIRE_RENDERER"))

    # Logging
    log_file: Optional[Path] = field(default_factory=lambda: _env_path("MERMAID_CHECK_LOG_FILE"))
    verbose: bool = False

    def validate(self) -> list[str]:
        """Validate configuration and return list of warnings."""
        warnings = []

        if not self.open_fence.strip():
            warnings.append("Open fence marker is empty - every blank line would open a block")

        if not self.close_fence.strip():
            warnings.append("Close fence marker is empty - every blank line would close a block")

        if self.open_fence.strip() == self.close_fence.strip():
            warnings.append("Open and close fence markers are the same - blocks can never be closed")

        return warnings

    def with_overrides(self, **overrides) -> "CheckerConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Create configuration from environment variables."""
        return cls()

    @classmethod
    def for_testing(cls) -> "CheckerConfig":
        """Create configuration with built-in defaults, ignoring the environment."""
        return cls(
            open_fence=DEFAULT_OPEN_FENCE,
            close_fence=DEFAULT_CLOSE_FENCE,
            renderer_command=DEFAULT_RENDERER_COMMAND,
            require_renderer=False,
            log_file=None,
        )
