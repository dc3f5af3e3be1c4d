"""Main entry point for TaskNinja."""

import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from .config import config, load_config
from .core import CommandInterpreter
from .interfaces.cli import TaskNinjaCLI
from .storage import TaskStore

logger = logging.getLogger(__name__)


def setup_logging(level: str = "WARNING"):
    """Send log records to stderr so stdout carries only the response."""
    resolved = logging.getLevelName(level.upper())
    known = isinstance(resolved, int)

    logging.basicConfig(
        level=resolved if known else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    if not known:
        logger.warning("Unknown log level '%s'; using WARNING.", level)


def cli_main(argv: Optional[Sequence[str]] = None):
    """Entry point for CLI."""
    setup_logging(config.log_level)

    settings, read_error = load_config(base=config)
    if read_error is not None:
        logger.warning("Config not loaded (%s); using defaults.", read_error.cause)

    store = TaskStore(settings.data_file)
    interpreter = CommandInterpreter(store.load(), store=store, config=settings)

    cli = TaskNinjaCLI(interpreter, settings)
    cli.run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    cli_main()
