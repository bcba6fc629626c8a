import argparse
import logging
import sys

from . import __version__
from .commit import CommitMessageFlow
from .core import LozSession
from .errors import ConfigurationError, ProviderEnvironmentError
from .loop import CommandLoop
from .utils.config import Config
from .utils.console import console, print_assistant_message, print_error, print_plain
from .utils.logging import setup_logging
from .utils.prompts import PIPE_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)

COMMIT_PROMPT_WORD = "commit"
GIT_USAGE_HINT = "Run loz like this: git diff | loz --git"
PIPE_USAGE_HINT = "Input your prompt:"


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="loz", description="Loz: a simple CLI for LLM")
    parser.add_argument("prompt", nargs="*", help="Prompt for the LLM. 'commit' writes a commit message for staged changes")
    parser.add_argument("-g", "--git", action="store_true", help="Generate a commit message from piped git output (git diff | loz --git)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging output.")
    parser.add_argument("--plain", action="store_true", help="Use plain text output")
    parser.add_argument("--no-stream", action="store_true", default=False, help="Disable streaming output")
    parser.add_argument("--version", action="version", version=f"loz {__version__}")
    return parser.parse_args(argv)


def show_answer(session: LozSession, answer: str) -> None:
    """Print a non-streamed answer, in a panel unless plain output was asked for."""
    if session.config.PLAIN_OUTPUT:
        print_plain(answer)
        return
    title, border_style = session.client.get_styling()
    print_assistant_message(answer, title=title or session.client.model, border_style=border_style)


def run_one_shot(session: LozSession, prompt: str) -> None:
    answer = session.ask(prompt)
    if answer and session.config.NO_STREAM:
        show_answer(session, answer)
    session.shutdown()


def run_piped_prompt(session: LozSession, prompt: str, data: str) -> None:
    params = session.build_params(
        PIPE_PROMPT_TEMPLATE.format(prompt=prompt, data=data),
        max_tokens=session.config.COMMIT_MAX_TOKENS,
        stream=False,
    )
    answer = session.pipeline.run(params)
    if answer:
        show_answer(session, answer)


def run_app(args: argparse.Namespace, session: LozSession) -> None:
    prompt = " ".join(args.prompt).strip()
    piped = not sys.stdin.isatty()

    if prompt == COMMIT_PROMPT_WORD:
        CommitMessageFlow(session).run()
        session.shutdown()
    elif prompt:
        if piped:
            run_piped_prompt(session, prompt, sys.stdin.read())
        else:
            run_one_shot(session, prompt)
    elif args.git:
        if piped:
            CommitMessageFlow(session).run_from_pipe(sys.stdin.read())
        else:
            console.print(GIT_USAGE_HINT, highlight=False)
    elif piped:
        console.print(PIPE_USAGE_HINT, highlight=False)
    else:
        CommandLoop(session).run()


def main(argv: list[str] | None = None) -> None:
    args = parse_arguments(argv)
    setup_logging(verbose=args.verbose, debug=args.debug)

    try:
        config_obj = Config()
    except Exception as e:
        # Catch potential Pydantic validation errors or .env issues during Config init
        print_error(f"Could not initialize configuration: {e}")
        sys.exit(1)

    config_obj.VERBOSE = config_obj.VERBOSE or args.verbose
    config_obj.PLAIN_OUTPUT = config_obj.PLAIN_OUTPUT or args.plain
    config_obj.NO_STREAM = config_obj.NO_STREAM or args.no_stream

    try:
        session = LozSession.create(config_obj)
    except (ConfigurationError, ProviderEnvironmentError) as e:
        logger.debug(f"Startup failed: {e!r}")
        print_error(str(e))
        sys.exit(1)

    run_app(args, session)
