"""CLI interface for TaskNinja."""

from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from ..config import Config
from ..core import CommandInterpreter, Response
from ..core.help import HelpText
from ..exceptions import CommandError


class TaskNinjaCLI:
    """
    Runs one command and prints exactly one response.

    Success messages use the success color, errors the error color, and
    listings and help the default color.
    """

    def __init__(
        self,
        interpreter: CommandInterpreter,
        config: Config,
        console: Optional[Console] = None,
    ):
        self.interpreter = interpreter
        self.config = config
        self.console = console or Console(highlight=False)

    def run(self, argv: Sequence[str]) -> Response:
        """Execute ``argv`` and print the outcome."""
        colors = self.config.colors
        try:
            response = self.interpreter.execute(argv)
        except CommandError as e:
            response = str(e)
            self.console.print(Text(response, style=colors.error))
            return response

        if isinstance(response, Text):
            self.console.print(response, style=colors.default)
        elif isinstance(response, HelpText):
            self.console.print(Text(response, style=colors.default))
        else:
            self.console.print(Text(response, style=colors.success))
        return response
