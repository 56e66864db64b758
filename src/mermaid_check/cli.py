"""
mermaid-check command line.

Validates the mermaid blocks of each file given on the command line, prints
a report per file and exits 0 only if every file was found and every diagram
passed.

::: This is-in-layer Presentation-Layer.
"""

import argparse
import logging
from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from .check_exceptions import (
    CheckFileError,
    CheckFileNotFoundError,
    RendererUnavailableError,
    UsageError,
)
from .config import CheckerConfig
from .logging_config import configure_logging
from .mermaid.markdown_validator import FileReport, validate_file
from .mermaid.validator import MermaidValidator
from .renderer import RendererProbe, check_renderer

logger = logging.getLogger(__name__)

PROG = "mermaid-check"
USAGE = f"Usage: {PROG} <file1> [file2 ...]"
DELIMITER = "---------------"

EXIT_OK = 0
EXIT_FAILURE = 1


def make_console(stderr: bool = False, **kwargs) -> Console:
    """Console that prints diagram text literally (no markup, emoji or highlighting)."""
    return Console(
        stderr=stderr,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
        **kwargs,
    )


class Reporter:
    """Prints per-file reports to stdout and file errors to stderr.

    ::: This is-in-layer Presentation-Layer.
    ::: This is a reporter.
    """

    def __init__(self, console: Console, err_console: Console, json_output: bool = False):
        self.console = console
        self.err_console = err_console
        self.json_output = json_output
        self._entries: list[dict] = []

    def file_report(self, report: FileReport) -> None:
        self._entries.append(report.to_dict())
        if self.json_output:
            return

        path = report.path
        self.console.print(f"Validating Mermaid diagrams in: {path}")

        if report.block_count == 0:
            self.console.print(f"No Mermaid diagrams found in {path}")
            return

        for block, result in report.failures:
            self.console.print(
                Text(f"Error in diagram at line {block.start_line} in {path}", style="bold red")
            )
            self.console.print("Diagram content:")
            self.console.print(DELIMITER)
            self.console.print(block.content)
            self.console.print(DELIMITER)
            self.console.print("Error message:")
            self.console.print(result.error)

        if report.valid:
            self.console.print(
                Text(f"✅ All {report.block_count} diagrams in {path} are valid", style="green")
            )
        else:
            self.console.print(
                Text(
                    f"❌ Found {report.error_count} errors in {report.block_count} diagrams in {path}",
                    style="red",
                )
            )

    def file_error(self, error: CheckFileError) -> None:
        if isinstance(error, CheckFileNotFoundError):
            message = f"Error: {error}"
        else:
            message = f"Error processing file {error.path}: {error}"
        self.err_console.print(Text(message, style="red"))
        self._entries.append({"path": str(error.path), "valid": False, "error": str(error)})

    def finish(self, success: bool) -> None:
        if self.json_output:
            self.console.print_json(data={"valid": success, "files": self._entries}, highlight=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Validate Mermaid diagrams embedded in text files without a renderer",
    )
    parser.add_argument("files", nargs="*", help="Files to check")
    parser.add_argument("--json", action="store_true", help="Print a JSON report instead of text")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--require-renderer",
        action="store_true",
        default=None,
        help="Fail if the mermaid renderer (mmdc) is not installed",
    )
    parser.add_argument("--renderer", dest="renderer_command", help="Renderer executable to probe for")
    parser.add_argument("--open-fence", help="Line that opens a diagram block (default: ```mermaid)")
    parser.add_argument("--close-fence", help="Line that closes a diagram block (default: ```)")
    return parser


def run(
    paths: Sequence[str],
    config: Optional[CheckerConfig] = None,
    console: Optional[Console] = None,
    err_console: Optional[Console] = None,
    probe=None,
    validator: Optional[MermaidValidator] = None,
    json_output: bool = False,
) -> int:
    """Check every path and return the process exit code.

    Missing or unreadable files and failing diagrams are reported and make
    the run fail, but never stop the remaining files from being checked.
    """
    config = config or CheckerConfig()
    console = console or make_console()
    err_console = err_console or make_console(stderr=True)
    probe = probe or RendererProbe(config.renderer_command)

    if not paths:
        raise UsageError(USAGE)

    try:
        check_renderer(probe, config.require_renderer)
    except RendererUnavailableError as e:
        err_console.print(Text(f"Error: {e}", style="red"))
        return EXIT_FAILURE

    reporter = Reporter(console, err_console, json_output=json_output)
    success = True

    for path in paths:
        try:
            report = validate_file(path, config=config, validator=validator)
        except CheckFileError as e:
            logger.debug("Could not check %s: %s", path, e)
            reporter.file_error(e)
            success = False
            continue

        reporter.file_report(report)
        if not report.valid:
            success = False

    reporter.finish(success)
    return EXIT_OK if success else EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for mermaid-check."""
    args = build_parser().parse_args(argv)

    config = CheckerConfig.from_env().with_overrides(
        open_fence=args.open_fence,
        close_fence=args.close_fence,
        renderer_command=args.renderer_command,
        require_renderer=args.require_renderer,
        verbose=args.verbose or None,
    )
    configure_logging(verbose=config.verbose, log_file=config.log_file)
    for warning in config.validate():
        logger.warning(warning)

    err_console = make_console(stderr=True)
    try:
        return run(args.files, config, err_console=err_console, json_output=args.json)
    except UsageError as e:
        err_console.print(str(e))
        return EXIT_FAILURE
