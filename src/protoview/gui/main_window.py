# src/protoview/gui/main_window.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog,
    QInputDialog,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QSplitter,
    QStatusBar,
    QWidget,
)

from protoview.config import PrototypeDefaults, add_recent_file, load_defaults, load_recent_files
from protoview.errors import PrototypeError
from protoview.gui.record_view import describe_line, search_lines, summarize_line
from protoview.logic.prototype_builder import build_record_from_path, build_records_for_tree
from protoview.logic.prototype_validator import validate_lines
from protoview.models.prototype_line import PrototypeLine
from protoview.models.prototype_record import PrototypeRecord
from protoview.parser.prototype_formatter import format_prototype_record
from protoview.prototype_loader import load_prototype_file, save_prototype_file

logger = logging.getLogger(__name__)

FILE_FILTER = "prototype ファイル (prototype *.proto *.txt);;すべてのファイル (*)"


class MainWindow(QMainWindow):
    """
    protoview のメインウィンドウ。

    左: 行一覧 / 右: 選択した行の詳細。
    1行 = 1レコードとして扱っています。
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("protoview - prototype(4) ビューア")
        self.resize(1000, 600)

        self._current_file: Optional[Path] = None
        self._lines: List[PrototypeLine] = []
        self._defaults: PrototypeDefaults = load_defaults()

        # 検索結果の状態
        self._search_hits: list[int] = []
        self._search_index: int = -1

        # UI 構築
        self._create_central_widgets()
        self._create_actions()
        self._create_menus()
        self._create_status_bar()

    # ─────────────────────────────
    # UI 構築
    # ─────────────────────────────
    def _create_central_widgets(self) -> None:
        splitter = QSplitter(Qt.Horizontal, self)

        self.line_list = QListWidget(splitter)
        self.line_list.setSelectionMode(QListWidget.SingleSelection)
        self.line_list.currentRowChanged.connect(self._on_line_selected)

        self.detail_view = QPlainTextEdit(splitter)
        self.detail_view.setReadOnly(True)
        self.detail_view.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.detail_view.setPlaceholderText("ここに選択した行の内容が表示されます")

        splitter.addWidget(self.line_list)
        splitter.addWidget(self.detail_view)
        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 3)

        self.setCentralWidget(splitter)

    def _create_actions(self) -> None:
        self.open_action = QAction("開く(&O)...", self)
        self.open_action.setShortcut(QKeySequence.Open)
        self.open_action.triggered.connect(self._on_open_file)

        self.save_action = QAction("名前を付けて保存(&S)...", self)
        self.save_action.setShortcut(QKeySequence.Save)
        self.save_action.triggered.connect(self._on_save_file)

        self.exit_action = QAction("終了(&Q)", self)
        self.exit_action.setShortcut("Ctrl+Q")
        self.exit_action.triggered.connect(self.close)

        # ファイルシステムから行を追加
        self.add_path_action = QAction("パスから追加(&A)...", self)
        self.add_path_action.setShortcut("Ctrl+Shift+A")
        self.add_path_action.triggered.connect(self._on_add_path)

        self.add_tree_action = QAction("ディレクトリ以下を追加(&D)...", self)
        self.add_tree_action.setShortcut("Ctrl+Shift+D")
        self.add_tree_action.triggered.connect(self._on_add_tree)

        self.search_action = QAction("検索(&F)...", self)
        self.search_action.setShortcut(QKeySequence.Find)
        self.search_action.triggered.connect(self._on_search)

        self.search_next_action = QAction("次を検索(&N)", self)
        self.search_next_action.setShortcut(QKeySequence.FindNext)
        self.search_next_action.triggered.connect(self._on_search_next)

    def _create_menus(self) -> None:
        menubar = self.menuBar()

        file_menu = menubar.addMenu("ファイル(&F)")
        file_menu.addAction(self.open_action)
        self.recent_menu = file_menu.addMenu("最近使ったファイル(&R)")
        self._populate_recent_menu()
        file_menu.addAction(self.save_action)
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        edit_menu = menubar.addMenu("編集(&E)")
        edit_menu.addAction(self.add_path_action)
        edit_menu.addAction(self.add_tree_action)

        view_menu = menubar.addMenu("表示(&V)")
        view_menu.addAction(self.search_action)
        view_menu.addAction(self.search_next_action)

    def _create_status_bar(self) -> None:
        status = QStatusBar(self)
        self.setStatusBar(status)
        self.statusBar().showMessage("prototype ファイルを開いてください (Ctrl+O)")

    def _populate_recent_menu(self) -> None:
        self.recent_menu.clear()
        recent = load_recent_files()
        for path in recent:
            action = QAction(str(path), self)
            action.triggered.connect(lambda _checked=False, p=path: self._load_file(p))
            self.recent_menu.addAction(action)
        self.recent_menu.setEnabled(bool(recent))

    # ─────────────────────────────
    # ファイル読み書き
    # ─────────────────────────────
    def _on_open_file(self) -> None:
        path_str, _ = QFileDialog.getOpenFileName(
            self, "prototype ファイルを開く", "", FILE_FILTER
        )
        if not path_str:
            return
        self._load_file(Path(path_str))

    def _load_file(self, path: Path) -> None:
        try:
            proto = load_prototype_file(path)
        except OSError as e:
            logger.warning("failed to open %s: %s", path, e)
            self.statusBar().showMessage(f"ファイル読み込みエラー: {e}")
            return

        self._current_file = path
        self._lines = proto.lines
        self._search_hits = []
        self._search_index = -1
        add_recent_file(path)
        self._populate_recent_menu()
        self._populate_line_list()

        bad = validate_lines(self._lines)
        self.statusBar().showMessage(
            f"{path.name} を読み込みました "
            f"(エンコーディング: {proto.encoding}, {len(self._lines)} 行, エラー {len(bad)} 行)"
        )

    def _on_save_file(self) -> None:
        records = [line.record for line in self._lines if line.record is not None]
        if not records:
            QMessageBox.information(self, "保存", "保存するレコードがありません。")
            return

        start = str(self._current_file) if self._current_file else ""
        path_str, _ = QFileDialog.getSaveFileName(
            self, "prototype ファイルを保存", start, FILE_FILTER
        )
        if not path_str:
            return

        try:
            save_prototype_file(Path(path_str), records)
        except (OSError, PrototypeError) as e:
            QMessageBox.warning(
                self,
                "保存エラー",
                f"prototype ファイルの保存に失敗しました。\n\nエラー: {e}",
            )
            return

        skipped = len(self._lines) - len(records)
        self.statusBar().showMessage(
            f"{Path(path_str).name} に {len(records)} 行を保存しました"
            + (f" (解析エラーの {skipped} 行は除外)" if skipped else "")
        )

    # ─────────────────────────────
    # ファイルシステムから追加
    # ─────────────────────────────
    def _append_records(self, records: List[PrototypeRecord]) -> None:
        next_no = (self._lines[-1].line_no + 1) if self._lines else 1
        for offset, record in enumerate(records):
            self._lines.append(
                PrototypeLine(
                    line_no=next_no + offset,
                    raw=format_prototype_record(record),
                    record=record,
                )
            )
        self._populate_line_list()
        if records:
            self.line_list.setCurrentRow(len(self._lines) - 1)

    def _on_add_path(self) -> None:
        path_str, _ = QFileDialog.getOpenFileName(self, "追加するファイルを選択", "")
        if not path_str:
            return

        display, ok = QInputDialog.getText(
            self,
            "パスから追加",
            "行に書くパス (空欄なら選択したパス。例: /opt/MYpkg/foo=./foo)：",
        )
        if not ok:
            return

        try:
            record = build_record_from_path(
                path_str, display.strip() or None, defaults=self._defaults
            )
        except (OSError, PrototypeError) as e:
            QMessageBox.warning(
                self, "追加エラー", f"{path_str} から行を作れませんでした。\n\nエラー: {e}"
            )
            return

        self._append_records([record])
        self.statusBar().showMessage(f"{path_str} を追加しました")

    def _on_add_tree(self) -> None:
        dir_str = QFileDialog.getExistingDirectory(self, "追加するディレクトリを選択", "")
        if not dir_str:
            return

        try:
            records = build_records_for_tree(dir_str, defaults=self._defaults)
        except OSError as e:
            QMessageBox.warning(
                self, "追加エラー", f"{dir_str} を読み込めませんでした。\n\nエラー: {e}"
            )
            return

        self._append_records(records)
        self.statusBar().showMessage(f"{dir_str} 以下の {len(records)} 行を追加しました")

    # ─────────────────────────────
    # 表示
    # ─────────────────────────────
    def _populate_line_list(self) -> None:
        self.line_list.clear()
        self.detail_view.clear()

        for line in self._lines:
            self.line_list.addItem(summarize_line(line))

        if self._lines:
            self.line_list.setCurrentRow(0)

    def _on_line_selected(self, row: int) -> None:
        if row < 0 or row >= len(self._lines):
            self.detail_view.clear()
            return

        line = self._lines[row]
        self.detail_view.setPlainText("\n".join(describe_line(line)))
        self.statusBar().showMessage(
            f"{line.line_no} 行目（種別: {line.file_kind}）を表示中 / 全 {len(self._lines)} 行"
        )

    # ─────────────────────────────
    # 検索
    # ─────────────────────────────
    def _on_search(self) -> None:
        if not self._lines:
            QMessageBox.information(self, "検索", "行が読み込まれていません。")
            return

        text, ok = QInputDialog.getText(self, "検索", "検索文字列を入力してください：")
        if not ok or not text:
            return

        keyword = str(text)
        self._search_hits = search_lines(self._lines, keyword)
        self._search_index = -1

        if not self._search_hits:
            QMessageBox.information(self, "検索", f"「{keyword}」は見つかりませんでした。")
            self.statusBar().showMessage(f"検索「{keyword}」: ヒット 0 件")
            return

        self._search_index = 0
        self._jump_to_hit()

    def _on_search_next(self) -> None:
        if not self._lines:
            return

        if not self._search_hits:
            self._on_search()
            return

        # 末尾まで行ったら先頭に戻る
        self._search_index = (self._search_index + 1) % len(self._search_hits)
        self._jump_to_hit()

    def _jump_to_hit(self) -> None:
        idx = self._search_hits[self._search_index]
        self.line_list.setCurrentRow(idx)
        self.line_list.scrollToItem(self.line_list.currentItem())
        self.statusBar().showMessage(
            f"検索結果: {len(self._search_hits)} 件中 "
            f"{self._search_index + 1} 件目を表示"
        )
