"""Interactive prompting for wtm.

The sync manager only talks to a ``Prompter``, so tests can script the
answers instead of reading from a terminal.
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console

from wtm.logging_config import get_logger

logger = get_logger(__name__)

YES_ANSWERS = ("y", "yes")


class Prompter(ABC):
    """Capability for asking the user questions."""

    @abstractmethod
    def prompt_line(self, message: str) -> str:
        """Show message and return one line of input without the newline.

        Raises:
            EOFError: If input is exhausted
        """

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; anything but y/yes means no."""
        try:
            answer = self.prompt_line(message)
        except EOFError:
            logger.debug(f"No answer to {message!r}, treating as no")
            return False
        return answer.strip().lower() in YES_ANSWERS


class ConsolePrompter(Prompter):
    """Prompter reading from stdin, writing prompts to stderr via rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True, highlight=False, emoji=False)

    def prompt_line(self, message: str) -> str:
        answer = self.console.input(message, markup=False, emoji=False)
        return answer.rstrip("\r\n")
