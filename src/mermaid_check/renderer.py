"""
Mermaid renderer availability probe.

The heuristic checks never depend on a renderer. The probe only tells the
command line whether mermaid-cli (``mmdc``) is installed, so a run can be
told to insist on it.

::: This is-in-layer Infrastructure-Layer.
"""

import logging
import shutil
import subprocess
from typing import Optional

from .check_exceptions import RendererUnavailableError

logger = logging.getLogger(__name__)

INSTALL_HINT = "Please install it using: npm install -g @mermaid-js/mermaid-cli"

VERSION_TIMEOUT_SECONDS = 10


class RendererProbe:
    """Looks up a renderer executable on PATH.

    ::: This is-in-layer Infrastructure-Layer.
    ::: This is a probe.
    ::: This is stateless.
    """

    def __init__(self, command: str = "mmdc"):
        self.command = command

    def is_available(self) -> bool:
        """Return True if the renderer executable is on PATH."""
        return shutil.which(self.command) is not None

    def version(self) -> Optional[str]:
        """Return the renderer's ``--version`` output, or None if it cannot run."""
        executable = shutil.which(self.command)
        if executable is None:
            return None
        try:
            result = subprocess.run(
                [executable, "--version"],
                capture_output=True,
                text=True,
                timeout=VERSION_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Renderer %s --version failed: %s", self.command, e)
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None


def check_renderer(probe, required: bool) -> bool:
    """Run the startup renderer check once.

    Args:
        probe: Object with a ``command`` attribute and ``is_available()``
        required: Raise instead of warning when the renderer is missing

    Returns:
        Whether the renderer is available

    Raises:
        RendererUnavailableError: if required and the renderer is missing
    """
    available = probe.is_available()
    if available:
        logger.debug("Renderer '%s' found", probe.command)
        return True

    if required:
        raise RendererUnavailableError(
            f"Renderer '{probe.command}' is not installed. {INSTALL_HINT}"
        )

    logger.warning(
        "Renderer '%s' not found; running heuristic checks only", probe.command
    )
    return False
