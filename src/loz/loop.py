"""Interactive read-eval loop with the ``config`` meta-command."""
import logging
from enum import Enum

from rich.console import Console
from rich.markup import escape

from .core import LozSession
from .utils.console import console as default_console
from .utils.input_handler import InputHandler
from .utils.session_config import API_KEY

logger = logging.getLogger(__name__)

BANNER = "Loz: a simple CLI for LLM"
GOODBYE = "Good bye!"
EXIT_COMMANDS = ("exit", "quit")
CONFIG_COMMAND = "config"


class LoopState(Enum):
    READING = "reading"
    DISPATCHING = "dispatching"
    COMPLETING = "completing"
    TERMINATING = "terminating"


class CommandLoop:
    """Reads lines until ``exit``, ``quit``, EOF or an interrupt, then shuts the session down."""

    def __init__(self, session: LozSession, input_handler: InputHandler | None = None, console: Console | None = None):
        self.session = session
        self.console = console or default_console
        self.input_handler = input_handler or InputHandler(console=self.console)
        self.state = LoopState.READING

    def run(self) -> None:
        self.console.print(BANNER, highlight=False)
        self.session.session_config.print_entries(self.console)
        try:
            while self.state is not LoopState.TERMINATING:
                self.state = LoopState.READING
                try:
                    line = self.input_handler.get_input()
                except (KeyboardInterrupt, EOFError):
                    self.console.print()
                    self.state = LoopState.TERMINATING
                    break
                self.state = LoopState.DISPATCHING
                if not self.handle_line(line):
                    self.state = LoopState.TERMINATING
        except KeyboardInterrupt:
            # Cancelled mid-completion: the stream is abandoned and nothing is recorded
            logger.info("Completion cancelled by user")
            self.console.print()
            self.state = LoopState.TERMINATING
        finally:
            self.console.print(GOODBYE, highlight=False)
            self.session.shutdown()

    def handle_line(self, line: str) -> bool:
        """Dispatch one input line. Returns False when the loop should stop."""
        if line in EXIT_COMMANDS:
            return False
        tokens = line.split()
        if tokens and tokens[0] == CONFIG_COMMAND and len(tokens) <= 3:
            self.handle_config_command(tokens[1:])
            return True
        if line == "":
            return True

        self.state = LoopState.COMPLETING
        self.session.ask(line)
        return True

    def handle_config_command(self, args: list[str]) -> None:
        session_config = self.session.session_config
        if not args:
            session_config.print_entries(self.console)
            return

        key = args[0]
        if len(args) == 1:
            value = session_config.get(key)
            self.console.print(value if value is not None else "undefined", highlight=False, markup=False)
            return

        value = args[1]
        previous = session_config.get(key)
        if previous is not None:
            self.console.print(f"{previous} will be updated with {value}", highlight=False, markup=False)
        session_config.set(key, value)
        logger.debug(f"Session config {key} set to {value}")
        if key == API_KEY:
            self.console.print(f"[dim]Provider '{escape(value)}' will be used the next time loz starts.[/dim]")
