"""
Interpreter - Entry point for command lines and prompt answers.

Pipeline for a new line:

    shortcut expansion -> tokenize -> normalize -> built-ins
        -> validate -> route to the verb's handler

While a handler is waiting for an answer (prompt mode), lines go to the
prompt engine instead and never reach the tokenizer. The host should
call handle_prompt_input() first and fall back to handle_command() only
when it returns False.
"""

import logging
from typing import Callable, Optional

from ..handlers import HANDLER_CLASSES, HandlerContext
from ..handlers.base import RecordSource
from ..parser.normalize import normalize_command
from ..parser.shortcuts import expand_shortcut
from ..parser.tokenizer import ParsedCommand, tokenize
from ..parser.validator import validate_command
from ..ui.manual import Manual
from .prompt import PromptEngine
from .session import CliSession

logger = logging.getLogger(__name__)

# Recognized but not built yet
NOT_IMPLEMENTED = ("init",)


class Interpreter:
    """
    Homebrew-style command interpreter for one terminal.

    Args:
        store: persistence collaborator exposing repository(entity_type)
        writeln: line-output sink
        session: per-terminal context (a fresh one if omitted)
        on_data_update: called after any successful change to the store
        aliases: extra single-word shortcuts (word -> full command)
    """

    def __init__(
        self,
        store: RecordSource,
        writeln: Callable[[str], None],
        session: Optional[CliSession] = None,
        on_data_update: Optional[Callable[[], None]] = None,
        aliases: Optional[dict[str, str]] = None
    ):
        self.writeln = writeln
        self.session = session if session is not None else CliSession()
        self.prompts = PromptEngine(writeln)
        self.manual = Manual(writeln)
        self.aliases = dict(aliases or {})

        context = HandlerContext(
            writeln=writeln,
            store=store,
            session=self.session,
            prompts=self.prompts,
        )
        if on_data_update is not None:
            context.on_data_update = on_data_update
        self.handlers = {cls.verb: cls(context) for cls in HANDLER_CLASSES}

    @property
    def is_prompt_mode(self) -> bool:
        return self.prompts.is_prompting

    def handle_prompt_input(self, line: str) -> bool:
        """
        Offer a line to the pending question.

        Returns True when the line was consumed as an answer, False when
        no question is pending and the line should run as a command.
        """
        if not self.prompts.is_prompting:
            return False
        try:
            return self.prompts.handle_input(line)
        except Exception as e:
            logger.exception("Unexpected error handling answer %r", line)
            self.prompts.reset()
            self.writeln(f"Error: {e}")
            return True

    def handle_command(self, line: str) -> None:
        """Run one command line. Never raises."""
        if self.prompts.is_prompting:
            # A pending question owns the next line
            self.handle_prompt_input(line)
            return

        if not line or not line.strip():
            return

        try:
            self.session.add_to_history(line)

            expanded = expand_shortcut(line.strip(), self.aliases)
            command = normalize_command(tokenize(expanded))

            if self._run_builtin(command, line):
                return

            validation = validate_command(command)
            if not validation.valid:
                self.writeln(f"Error: {validation.error}")
                if validation.suggestions:
                    self.writeln(f"Suggestions: {', '.join(validation.suggestions)}")
                return

            handler = self.handlers.get(command.verb)
            if handler is None:
                self.writeln(f"Unknown command: {command.verb or line.split()[0]}")
                self.writeln('Type "help" for available commands.')
                return

            logger.debug("Dispatching %s %s", command.verb, command.entity)
            handler.execute(command)

        except Exception as e:
            logger.exception("Unexpected error handling %r", line)
            self.writeln(f"Error: {e}")

    def _run_builtin(self, command: ParsedCommand, line: str) -> bool:
        """Verbs handled before validation. Returns True when handled."""
        bare = line.strip().lower()

        if command.verb == "help" or bare == "help":
            self.manual.show_help()
            return True

        if command.verb == "man" or bare == "man":
            if command.entity:
                self.manual.show_topic(command.entity)
            else:
                self.manual.show_manual()
            return True

        if command.verb == "history" and not command.entity:
            self.show_history()
            return True

        if command.verb in NOT_IMPLEMENTED:
            self.writeln(f'"{command.verb}" command not yet implemented')
            return True

        return False

    def show_history(self) -> None:
        history = self.session.get_history()
        width = len(str(len(history)))
        for number, entry in enumerate(history, 1):
            self.writeln(f"  {number:>{width}}  {entry}")
