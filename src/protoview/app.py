# src/protoview/app.py
"""
PySide6 の QApplication を立ち上げて MainWindow を表示する。
"""

from __future__ import annotations

import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from protoview.gui.main_window import MainWindow

LOG_LEVEL_ENV = "PROTOVIEW_LOG_LEVEL"


def configure_logging() -> None:
    """ログレベルは環境変数 PROTOVIEW_LOG_LEVEL (既定 INFO)。"""
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    configure_logging()
    app = QApplication(sys.argv)
    win = MainWindow()
    win.show()
    return app.exec()
