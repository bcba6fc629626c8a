#!/usr/bin/env python
import sys

from loz.cli import main as cli_main
from loz.utils.console import error_console


def main() -> None:
    try:
        cli_main()
        sys.exit(0)
    except KeyboardInterrupt:
        error_console.print()
        sys.exit(130)
    except Exception as e:
        error_console.print(f"[bold red]loz failed unexpectedly:[/bold red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
