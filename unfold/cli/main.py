"""
unfold CLI.

    unfold                          Interactive mode (REPL)
    unfold list tasks               Run one command and exit
    unfold create program --guided  Questions are answered on stdin

Options:
  --db PATH       SQLite database path (overrides config and UNFOLD_DB)
  --config PATH   Settings file (default: ~/.config/unfold/config.yaml)
  --verbose, -v   Debug logging on stderr
"""

import argparse
import logging
import re
import sys

from unfold import __version__
from unfold.config import load_settings
from unfold.core.interpreter import Interpreter
from unfold.core.session import CliSession
from unfold.db.record_store import RecordStore
from unfold.parser.tokenizer import QUOTE_CHARS
from unfold.cli.host import TerminalHost

logger = logging.getLogger(__name__)

QUIT_WORDS = ("quit", "exit", "q")

FLAG_PREFIX = re.compile(r"^(--?[a-zA-Z0-9_-]+=|[a-zA-Z0-9_-]+:)(.*)$", re.DOTALL)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="unfold",
        description="unfold - Homebrew-style command line for programs, projects and tasks"
    )
    parser.add_argument(
        "--db",
        default=None,
        help="SQLite database path (default: from config, then unfold.db)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Settings file (default: ~/.config/unfold/config.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help='Command to run once, e.g. list tasks or create task "Fix bug"',
    )
    return parser


def join_argv(argv: list[str]) -> str:
    """
    Rebuild a command line from shell-split arguments.

    Arguments containing whitespace or a quote character are quoted
    again so the tokenizer sees the same grouping; for key:value and
    --key=value only the value is quoted.
    """
    parts = []
    for arg in argv:
        if not any(char.isspace() or char in QUOTE_CHARS for char in arg):
            parts.append(arg)
            continue
        match = FLAG_PREFIX.match(arg)
        if match:
            prefix, value = match.groups()
            parts.append(prefix + _quote(value))
        else:
            parts.append(_quote(arg))
    return " ".join(parts)


def _quote(text: str) -> str:
    quote = "'" if '"' in text else '"'
    return f"{quote}{text}{quote}"


def run_once(interpreter: Interpreter, line: str) -> None:
    """Run one command, answering any questions from stdin."""
    interpreter.handle_command(line)
    while interpreter.is_prompt_mode:
        try:
            answer = input("? ")
        except EOFError:
            interpreter.prompts.reset()
            print("\nCancelled.")
            break
        interpreter.handle_prompt_input(answer)


def repl(interpreter: Interpreter) -> None:
    """Interactive mode."""
    host = TerminalHost(interpreter, write=lambda text: None)

    print(f"unfold {__version__}")
    print('Type "help" for available commands, "quit" to exit.\n')

    while True:
        try:
            line = input("? " if interpreter.is_prompt_mode else "> ")
        except KeyboardInterrupt:
            print()
            host.interrupt()
            continue
        except EOFError:
            print("\nGoodbye!")
            break

        if not interpreter.is_prompt_mode and line.strip().lower() in QUIT_WORDS:
            print("Goodbye!")
            break

        host.submit_line(line)


def main():
    parser = build_parser()
    args = parser.parse_args()

    settings = load_settings(args.config)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    db_path = args.db or settings.db_path
    store = RecordStore(db_path)
    store.ensure_schema()
    logger.info("Session started with database %s", db_path)

    interpreter = Interpreter(
        store=store,
        writeln=print,
        session=CliSession(history_limit=settings.history_limit),
        aliases=settings.aliases,
    )

    if args.command:
        run_once(interpreter, join_argv(args.command))
    else:
        repl(interpreter)
    return 0


if __name__ == "__main__":
    sys.exit(main())
