import sys
from typing import TextIO

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.markdown import Markdown
from rich.panel import Panel

console = Console()
error_console = Console(stderr=True)


def write_fragment(out: TextIO, fragment: str) -> None:
    """Write streamed text as-is and flush so it appears immediately."""
    out.write(fragment)
    out.flush()


def print_plain(text: str, out: TextIO | None = None) -> None:
    target = out or sys.stdout
    target.write(text)
    target.write("\n")
    target.flush()


def print_error(message: str, target: Console | None = None) -> None:
    (target or error_console).print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)


def print_assistant_message(content: str, title: str, border_style: str = "green", target: Console | None = None) -> None:
    """Render an answer in a panel. First paragraph boxed, the rest below."""
    target = target or console
    if not content.strip():
        target.print("[bold red]Error:[/bold red] Empty response received.")
        return
    parts = content.strip().split("\n\n", 1)
    panel = Panel(
        Markdown(parts[0]),
        title=title,
        border_style=border_style,
        padding=(1, 2),
    )
    target.print(Align(panel, align="left"))
    if len(parts) > 1:
        target.print(Align(Markdown(parts[1]), align="left", pad=False))
