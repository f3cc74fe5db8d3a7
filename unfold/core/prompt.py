"""
Prompt continuation engine.

Lets one command span several input lines. The engine is either IDLE
or PROMPTING; while prompting it owns exactly one PendingQuestion whose
continuation receives the next accepted answer.

Handlers usually do not register continuations by hand. They write a
dialog as a generator that yields Questions and receives answers:

    def dialog():
        title = yield Question("Title*", required=True)
        notes = yield Question("Notes")
        store.create({"title": title, "notes": notes})

    engine.start(dialog(), on_error=report)

Each `yield` suspends the dialog until the host feeds the next line
through handle_input().
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generator, Optional

logger = logging.getLogger(__name__)

RETRY_NOTICE = "This field is required. Please try again."


class PromptState(Enum):
    IDLE = "idle"
    PROMPTING = "prompting"


@dataclass(frozen=True)
class Question:
    """What a dialog yields to ask for the next answer."""
    text: str
    required: bool = False


@dataclass
class PendingQuestion:
    question_text: str
    required: bool
    continuation: Callable[[str], None]


Dialog = Generator[Question, str, None]


class PromptEngine:
    """Single pending question that intercepts the next input line."""

    def __init__(self, writeln: Callable[[str], None]):
        self.writeln = writeln
        self._pending: Optional[PendingQuestion] = None

    @property
    def state(self) -> PromptState:
        return PromptState.PROMPTING if self._pending else PromptState.IDLE

    @property
    def is_prompting(self) -> bool:
        return self._pending is not None

    @property
    def pending(self) -> Optional[PendingQuestion]:
        return self._pending

    def prompt(
        self,
        question: str,
        required: bool,
        on_answer: Callable[[str], None]
    ) -> None:
        """Ask question; on_answer gets the next accepted (trimmed) answer."""
        self._pending = PendingQuestion(question, required, on_answer)
        self.writeln(f"{question}:")

    def handle_input(self, line: str) -> bool:
        """
        Feed one input line to the pending question.

        Returns False when idle, meaning the line is a new command.
        A required question answered with nothing is asked again and
        the engine stays in PROMPTING.
        """
        pending = self._pending
        if pending is None:
            return False

        answer = (line or "").strip()
        if pending.required and not answer:
            self.writeln(RETRY_NOTICE)
            self.writeln(f"{pending.question_text}:")
            return True

        self._pending = None
        pending.continuation(answer)
        return True

    def reset(self) -> None:
        """Drop any pending question and return to IDLE."""
        if self._pending is not None:
            logger.debug("Discarding pending question %r", self._pending.question_text)
        self._pending = None

    # =========================================================================
    # Generator dialogs
    # =========================================================================

    def start(self, dialog: Dialog, on_error: Callable[[Exception], None]) -> None:
        """Run dialog until its first question (or until it finishes)."""
        self._advance(dialog, None, on_error)

    def _advance(self, dialog: Dialog, answer: Optional[str], on_error) -> None:
        try:
            if answer is None:
                question = next(dialog)
            else:
                question = dialog.send(answer)
        except StopIteration:
            return
        except Exception as e:
            self.reset()
            on_error(e)
            return

        self.prompt(
            question.text,
            question.required,
            lambda value: self._advance(dialog, value, on_error),
        )
