"""Confirmation gate before destructive deletion."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

import typer
from rich.console import Console

from ..errors import ConfirmationError

logger = logging.getLogger(__name__)

CONFIRMATION_WORD = "nuke"
DEFAULT_FORCE_DELAY_SECONDS = 10


class ConfirmationGate(ABC):
    """Returns a go/no-go decision before deletion starts."""

    @abstractmethod
    def confirm(self) -> bool:
        """Ask for confirmation.

        Returns:
            True to proceed with deletion

        Raises:
            ConfirmationError: If the answer could not be obtained
        """


class PromptConfirmation(ConfirmationGate):
    """Interactive prompt requiring the exact word 'nuke'."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def confirm(self) -> bool:
        self.console.print(
            "\nTHE NEXT STEPS ARE DESTRUCTIVE AND COMPLETELY IRREVERSIBLE, PROCEED WITH CAUTION!!!",
            style="bold bright_red",
        )
        try:
            answer = typer.prompt(
                f"\nAre you sure you want to nuke all listed resources? Enter '{CONFIRMATION_WORD}' to confirm",
                default="",
                show_default=False,
            )
        except (typer.Abort, EOFError, KeyboardInterrupt) as e:
            raise ConfirmationError(f"Failed to read confirmation: {e.__class__.__name__}") from e

        return answer.strip() == CONFIRMATION_WORD


class CountdownConfirmation(ConfirmationGate):
    """Used with --force: waits out a visible countdown, then proceeds."""

    def __init__(
        self,
        delay_seconds: int = DEFAULT_FORCE_DELAY_SECONDS,
        console: Optional[Console] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.delay_seconds = delay_seconds
        self.console = console or Console()
        self.sleep = sleep

    def confirm(self) -> bool:
        logger.warning(
            f"The --force flag is set, so waiting for {self.delay_seconds} seconds before proceeding to nuke "
            "everything in scope. If you don't want to proceed, hit CTRL+C now!!"
        )
        for remaining in range(self.delay_seconds, 0, -1):
            self.console.print(f"{remaining}...", end="")
            self.sleep(1)
        self.console.print()
        return True
