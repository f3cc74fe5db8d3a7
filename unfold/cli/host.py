"""
Terminal host - Turns keystrokes into submitted lines.

Gating rules for a submitted line:
- prompt mode: always accepted, goes to the pending question
- processing a command: dropped (not queued)
- otherwise: run as a new command
"""

import logging
from typing import Callable

from ..core.interpreter import Interpreter
from ..parser.shortcuts import complete

logger = logging.getLogger(__name__)

SUBMIT = "\r"
BACKSPACE = "\x7f"
INTERRUPT = "\x03"
TAB = "\t"


class TerminalHost:
    """One terminal: a line buffer in front of one interpreter."""

    def __init__(self, interpreter: Interpreter, write: Callable[[str], None]):
        self.interpreter = interpreter
        self.write = write
        self.buffer = ""
        self.processing = False

    def feed(self, data: str) -> None:
        """Process raw terminal input, one character at a time."""
        for char in data:
            if char == SUBMIT:
                line = self.buffer
                self.buffer = ""
                self.write("\r\n")
                self.submit_line(line)
            elif char == BACKSPACE:
                if self.buffer:
                    self.buffer = self.buffer[:-1]
                    self.write("\b \b")
            elif char == INTERRUPT:
                self.interrupt()
            elif char == TAB:
                self.tab_complete()
            elif char.isprintable():
                self.buffer += char
                self.write(char)

    def submit_line(self, line: str) -> bool:
        """
        Hand a complete line to the interpreter.

        Returns False when the line was dropped because a command is
        still running.
        """
        if self.interpreter.is_prompt_mode:
            self.interpreter.handle_prompt_input(line)
            return True

        if self.processing:
            logger.debug("Dropping line while a command is running: %r", line)
            return False

        self.processing = True
        try:
            self.interpreter.handle_command(line)
        finally:
            self.processing = False
        return True

    def interrupt(self) -> None:
        """Ctrl+C: forget the unsubmitted line."""
        self.buffer = ""
        self.processing = False
        self.write("^C\r\n")

    def tab_complete(self) -> None:
        """
        Tab: finish the buffered line from the known commands.

        A single candidate replaces the buffer; several are listed and
        the buffer is echoed again. Answers to questions are not completed.
        """
        if self.interpreter.is_prompt_mode:
            return
        candidates = complete(self.buffer)
        if len(candidates) == 1:
            self.write(candidates[0][len(self.buffer):])
            self.buffer = candidates[0]
        elif candidates:
            self.write("\r\n" + "  ".join(candidates) + "\r\n" + self.buffer)
