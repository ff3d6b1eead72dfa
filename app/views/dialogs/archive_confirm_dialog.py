from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox


class DialogConfirmationGate:
    """Per-file confirmation through a Qt message box.

    "Yes to All" / "No to All" answers are remembered for the rest of the run.
    """

    def __init__(self, parent=None) -> None:
        self._parent = parent
        self._sticky: bool | None = None
        self._app = None

    def __call__(self, source_path: Path, description: str) -> bool:
        if self._sticky is not None:
            return self._sticky
        if QApplication.instance() is None:
            self._app = QApplication([])
        buttons = (
            QMessageBox.StandardButton.Yes
            | QMessageBox.StandardButton.No
            | QMessageBox.StandardButton.YesToAll
            | QMessageBox.StandardButton.NoToAll
        )
        answer = QMessageBox.question(
            self._parent,
            "Confirm Archive",
            f"{description}\n\nProceed with {Path(source_path).name}?",
            buttons,
            QMessageBox.StandardButton.No,
        )
        if answer == QMessageBox.StandardButton.YesToAll:
            self._sticky = True
        elif answer == QMessageBox.StandardButton.NoToAll:
            self._sticky = False
        return answer in (QMessageBox.StandardButton.Yes, QMessageBox.StandardButton.YesToAll)
