"""Confirmation gate implementations and selection by name."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from core.models import ExecutionMode
from core.services.interfaces import ConfirmationGate
from infrastructure.archive_service import always_confirm, never_confirm

GATE_CHOICES = ("auto", "console", "dialog")


class ConsoleConfirmationGate:
    """Asks on stdin for each file; `a` accepts and `q` declines all remaining files."""

    def __init__(self, ask: Callable[[str], str] = input) -> None:
        self._ask = ask
        self._sticky: bool | None = None

    def __call__(self, source_path: Path, description: str) -> bool:
        if self._sticky is not None:
            return self._sticky
        try:
            answer = self._ask(f"{description} [y/N/a/q]: ").strip().lower()
        except EOFError:
            self._sticky = False
            return False
        if answer == "a":
            self._sticky = True
            return True
        if answer == "q":
            self._sticky = False
            return False
        return answer in {"y", "yes"}


def make_confirmation_gate(choice: str, mode: ExecutionMode) -> ConfirmationGate:
    """Return the gate for `choice`; dry-run always gets the always-no gate."""
    if mode.dry_run:
        return never_confirm
    if choice == "console":
        return ConsoleConfirmationGate()
    if choice == "dialog":
        # Qt is only loaded when a dialog is actually requested
        # pylint: disable-next=import-outside-toplevel
        from app.views.dialogs.archive_confirm_dialog import DialogConfirmationGate

        return DialogConfirmationGate()
    if choice == "auto":
        return always_confirm
    raise ValueError(f"Unknown confirmation gate: {choice!r}")
