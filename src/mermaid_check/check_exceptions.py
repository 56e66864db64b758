"""
Mermaid Check Exception Hierarchy

Contains all exception classes raised by the checker. Diagram validation
failures are not exceptions; they are reported as ValidationResult values.
"""


class MermaidCheckError(Exception):
    """
    Base exception for all mermaid-check operations.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


class UsageError(MermaidCheckError):
    """
    Raised when the command line is missing required arguments.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


class CheckFileError(MermaidCheckError):
    """
    Exception for file access while checking a document.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """

    def __init__(self, path, message: str):
        super().__init__(message)
        self.path = path


class CheckFileNotFoundError(CheckFileError):
    """
    Raised when a path does not exist or is not a regular file.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """

    def __init__(self, path):
        super().__init__(path, f"File not found - {path}")


class CheckFileReadError(CheckFileError):
    """
    Raised when an existing file cannot be read or decoded as UTF-8.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


class RendererUnavailableError(MermaidCheckError):
    """
    Raised when a renderer is required but not installed.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.

    Only raised when the run was configured with require_renderer; otherwise
    a missing renderer is logged and the heuristic checks run alone.
    """
    pass


__all__ = [
    "MermaidCheckError",
    "UsageError",
    "CheckFileError",
    "CheckFileNotFoundError",
    "CheckFileReadError",
    "RendererUnavailableError",
]
