"""
Modal dialogs shared by the main window.
"""
from PyQt5.QtWidgets import QMessageBox, QWidget


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show an error with the underlying message unmodified."""
    QMessageBox.critical(parent, title, message)


def confirm(
    parent: QWidget, title: str, message: str, accept_text: str, reject_text: str
) -> bool:
    """
    Ask the user to confirm an action.

    Args:
        parent: Parent widget
        title: Dialog title
        message: Question shown to the user
        accept_text: Label of the confirming button
        reject_text: Label of the cancelling button (the default)

    Returns:
        True if the user chose ``accept_text``
    """
    box = QMessageBox(parent)
    box.setIcon(QMessageBox.Question)
    box.setWindowTitle(title)
    box.setText(message)
    accept_button = box.addButton(accept_text, QMessageBox.AcceptRole)
    reject_button = box.addButton(reject_text, QMessageBox.RejectRole)
    box.setDefaultButton(reject_button)
    box.exec_()
    return box.clickedButton() is accept_button


def confirm_clear(parent: QWidget, page: int) -> bool:
    return confirm(
        parent,
        "Clear page annotations?",
        f"Remove all annotations from page {page + 1}?",
        "Clear",
        "Keep",
    )


def confirm_discard(parent: QWidget) -> bool:
    return confirm(
        parent,
        "Your changes will be lost!",
        "Annotations made since the last save will be discarded.",
        "Close anyway",
        "Keep editing",
    )
