"""
Application entry point.
"""
import sys

from PyQt5.QtWidgets import QApplication

from pdfrankenstein.config import get_settings
from pdfrankenstein.utils.logging import set_level


def main():
    """
    Run the annotation application.
    An optional PDF path may be passed as the first command-line argument.
    """
    app = QApplication(sys.argv)
    app.setApplicationName("PDFrankenstein")

    # Imported after QApplication exists so widgets can be created
    from pdfrankenstein.ui import MainWindow

    set_level(get_settings().log_level)

    file_path = None
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    window = MainWindow(file_path)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
