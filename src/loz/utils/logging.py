"""Logging setup for the CLI.

Three levels:
- Normal: warnings and errors only, rich-formatted on stderr
- Verbose (--verbose): INFO messages as well
- Debug (--debug): everything, plain format, so it can be piped to a file
"""
import logging

from rich.logging import RichHandler

from .console import error_console

NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "openai",
    "requests",
    "urllib3",
    "git",
    "markdown_it",
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S",
            force=True,
        )
    else:
        logging.basicConfig(
            level=logging.INFO if verbose else logging.WARNING,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(
                console=error_console,
                show_path=False,
                rich_tracebacks=True,
                markup=False,
            )],
            force=True,
        )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
