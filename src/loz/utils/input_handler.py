import sys

from rich.console import Console

PROMPT = "> "


class InputHandler:
    """Reads one line at a time for the interactive loop.

    ``KeyboardInterrupt`` and ``EOFError`` propagate so the loop can shut down.
    """

    def __init__(self, console=None, prompt: str = PROMPT):
        self.console = console or Console()
        self.prompt = prompt

    def get_input(self) -> str:
        if not sys.stdin.isatty():
            line = sys.stdin.readline()
            if not line:
                raise EOFError
            return line.rstrip("\n")
        return self.console.input(self.prompt)
