#===============================================================================
#  LeaderKey | main_window.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Desktop host for the navigation session:
#    - Input box: keystrokes (browse), query (search), key-path (confirmed)
#    - List: current group (grouped by type) or search results with key-paths
#    - Keys: Tab search / back to search, Backspace on empty input goes back,
#      Ctrl+Enter locks results, Enter activates the selected row, Esc resets
#    - Right-click: add action/group, edit, delete, import, export, clear all
#    - Status bar shows success/failure notices
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QInputDialog,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMenu,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from .constants import (
    APP_TITLE,
    COMMAND_LOG_FILE_NAME,
    EXPORT_FILE_NAME,
    LOGS_DIR_NAME,
    PREFERENCES_FILE_NAME,
    STORAGE_FILE_NAME,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    default_data_dir,
)
from .controller import ConfigController
from .launcher import ActionDispatcher, SystemHost
from .logging_utils import setup_logger
from .models import ACTION_TYPES, Group, Mode, NodeType, SearchResult, is_group
from .notifications import LogNotifier, Notice, NoticeStyle
from .preferences import load_preferences, timeout_ms
from .session import NavigationSession
from .storage import LocalStorage
from .tree import group_and_sort_items, value_preview

BG = "#101010"


class KeyLineEdit(QLineEdit):
    """Line edit that reports the navigation keys instead of handling them."""

    tab_pressed = Signal()
    back_pressed = Signal()
    confirm_pressed = Signal()
    activate_pressed = Signal()
    escape_pressed = Signal()

    def event(self, event):
        # Tab would otherwise move focus before keyPressEvent sees it
        if event.type() == QEvent.KeyPress and event.key() in (Qt.Key_Tab, Qt.Key_Backtab):
            self.tab_pressed.emit()
            return True
        return super().event(event)

    def keyPressEvent(self, event):
        key = event.key()
        if key in (Qt.Key_Return, Qt.Key_Enter):
            if event.modifiers() & Qt.ControlModifier:
                self.confirm_pressed.emit()
            else:
                self.activate_pressed.emit()
            return
        if key == Qt.Key_Backspace and not self.text():
            self.back_pressed.emit()
            return
        if key == Qt.Key_Escape:
            self.escape_pressed.emit()
            return
        super().keyPressEvent(event)


class MainWindow(QMainWindow):
    def __init__(self, controller: ConfigController, session: NavigationSession, notices: LogNotifier):
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.controller = controller
        self.session = session
        self.session.on_change = self.refresh
        notices.subscribe(self.show_notice)

        self.setStyleSheet(f"""
        QMainWindow {{ background: {BG}; }}
        QLabel {{ color: white; font-family: "Segoe UI"; }}
        QLineEdit, QListWidget {{
            font-family: "Segoe UI";
            color: white;
            background: #1a1a1a;
            border: 1px solid #2a2a2a;
            padding: 6px;
        }}
        """)

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        self.title = QLabel()
        layout.addWidget(self.title)

        self.input = KeyLineEdit()
        self.input.textEdited.connect(self.on_text_edited)
        self.input.tab_pressed.connect(self.on_tab)
        self.input.back_pressed.connect(self.on_back)
        self.input.confirm_pressed.connect(self.on_confirm)
        self.input.activate_pressed.connect(self.activate_current)
        self.input.escape_pressed.connect(self.on_escape)
        layout.addWidget(self.input)

        self.list = QListWidget()
        self.list.itemActivated.connect(self.activate_item)
        self.list.setContextMenuPolicy(Qt.CustomContextMenu)
        self.list.customContextMenuRequested.connect(self.open_context_menu)
        layout.addWidget(self.list)

        self.refresh()

    # ----------------------------
    # Notices
    # ----------------------------
    def show_notice(self, notice: Notice):
        timeout = 6000 if notice.style == NoticeStyle.FAILURE.value else 3000
        self.statusBar().showMessage(notice.text(), timeout)

    # ----------------------------
    # UI population
    # ----------------------------
    def refresh(self):
        s = self.session
        crumb = s.breadcrumb()
        if s.mode == Mode.CONFIRMED.value:
            self.title.setText(f"<b>Type Key Sequence</b> — {len(s.confirmed_results)} results • {s.key_sequence or 'waiting...'}")
        elif s.mode == Mode.SEARCH.value:
            self.title.setText(f"<b>Search Results</b> — {len(s.search_results)}")
        else:
            self.title.setText(f"<b>{APP_TITLE}</b>" + (f" — {crumb}" if crumb else ""))

        if self.input.text() != s.search_text:
            self.input.setText(s.search_text)
        self.input.setPlaceholderText(s.placeholder())
        self.rebuild_list()

    def rebuild_list(self):
        self.list.clear()
        s = self.session

        if s.mode in (Mode.SEARCH.value, Mode.CONFIRMED.value):
            for result in s.results:
                self.add_result_row(result)
            return

        for _, title, items in group_and_sort_items(s.current_items):
            header = QListWidgetItem(f"{title} ({len(items)})")
            header.setFlags(Qt.NoItemFlags)
            self.list.addItem(header)
            for node in items:
                subtitle = f"{len(node.actions)} items" if isinstance(node, Group) else value_preview(node)
                item = QListWidgetItem(f"[{node.key}]  {node.label or ''}  —  {subtitle}")
                item.setData(Qt.UserRole, node)
                self.list.addItem(item)

        if not s.current_items:
            empty = QListWidgetItem("Empty group — right-click to add an action or a group, Tab to search")
            empty.setFlags(Qt.NoItemFlags)
            self.list.addItem(empty)

    def add_result_row(self, result: SearchResult):
        node = result.item
        subtitle = f"{len(node.actions)} items" if isinstance(node, Group) else value_preview(node)
        if self.session.mode == Mode.CONFIRMED.value:
            sequence = result.key_sequence
            typed = self.session.key_sequence
            marker = "=" if typed == sequence else ("~" if typed and sequence.startswith(typed) else " ")
            text = f"{marker} {sequence}  {node.label or node.key}  —  {subtitle}"
        else:
            text = f"{' → '.join(result.path_keys)}  {node.label or node.key}  —  {subtitle}"
        item = QListWidgetItem(text)
        item.setData(Qt.UserRole, result)
        self.list.addItem(item)

    # ----------------------------
    # Input
    # ----------------------------
    def on_text_edited(self, text: str):
        self.session.handle_text(text)
        self.refresh()

    def on_tab(self):
        s = self.session
        if s.mode == Mode.CONFIRMED.value:
            s.go_back()
        elif s.mode == Mode.SEARCH.value:
            s.exit_search()
        else:
            s.enter_search()
        self.refresh()

    def on_back(self):
        self.session.go_back()
        self.refresh()

    def on_confirm(self):
        self.session.confirm_search()
        self.refresh()

    def on_escape(self):
        self.session.reset()
        self.refresh()

    def activate_current(self):
        item = self.list.currentItem()
        if item is None:
            rows = [self.list.item(i) for i in range(self.list.count())]
            item = next((r for r in rows if r.data(Qt.UserRole) is not None), None)
        if item is not None:
            self.activate_item(item)

    def activate_item(self, item: QListWidgetItem):
        data = item.data(Qt.UserRole)
        if data is None:
            return
        s = self.session
        if isinstance(data, SearchResult):
            if s.mode == Mode.CONFIRMED.value:
                s.execute_confirmed_result(data)
            else:
                s.select_search_result(data)
        else:
            s.open_item(data)
        self.refresh()

    # ----------------------------
    # Context menu actions
    # ----------------------------
    def open_context_menu(self, pos):
        item = self.list.itemAt(pos)
        data = item.data(Qt.UserRole) if item else None

        menu = QMenu(self)
        chosen_handlers = {}

        def add(title, handler):
            act = QAction(title, self)
            menu.addAction(act)
            chosen_handlers[act] = handler

        if isinstance(data, SearchResult):
            parent_title = f"Go to Parent ({data.parent_label})" if len(data.path) > 1 else "Go to Root"
            add(parent_title, lambda: self.session.go_to_parent(data))
            if self.session.mode == Mode.SEARCH.value:
                add("Type Keys", self.session.confirm_search)
            add("Exit Search", self.session.exit_search)
        elif self.session.mode == Mode.BROWSE.value:
            add("Add Action…", lambda: self.add_item_dialog("action"))
            add("Add Group…", lambda: self.add_item_dialog("group"))
            if data is not None:
                add("Edit Item…", lambda: self.edit_item_dialog(data))
                add("Delete Item", lambda: self.delete_item_dialog(data))
                if not is_group(data):
                    add("Copy Value", lambda: QApplication.clipboard().setText(data.value))
            menu.addSeparator()
            add("Import Config…", self.import_dialog)
            add("Export Config…", self.export_dialog)
            add("Clear All Configuration", self.clear_dialog)

        chosen = menu.exec(self.list.mapToGlobal(pos))
        if chosen in chosen_handlers:
            chosen_handlers[chosen]()
        self.refresh()

    def add_item_dialog(self, kind: str):
        key, ok = QInputDialog.getText(self, "Add", "Key (single character):")
        if not ok:
            return
        label, ok = QInputDialog.getText(self, "Add", "Label:")
        if not ok:
            return

        action_type, value, browser = ACTION_TYPES[0], "", ""
        if kind == "action":
            action_type, ok = QInputDialog.getItem(self, "Add", "Action type:", list(ACTION_TYPES), 0, False)
            if not ok:
                return
            value, ok = QInputDialog.getText(self, "Add", "Value (path, URL or command):")
            if not ok:
                return
        if kind == "group" or action_type == "url":
            browser, ok = QInputDialog.getText(self, "Add", "Browser (empty = default):")
            if not ok:
                return

        self.controller.add_item(
            list(self.session.location),
            kind=kind,
            key=key,
            label=label,
            value=value,
            action_type=action_type,
            browser=browser,
        )

    def edit_item_dialog(self, node):
        path = list(self.session.location) + [node.id]
        key, ok = QInputDialog.getText(self, "Edit", "Key:", text=node.key)
        if not ok:
            return
        label, ok = QInputDialog.getText(self, "Edit", "Label:", text=node.label or "")
        if not ok:
            return
        fields = {"key": key, "label": label}
        action_type = NodeType.GROUP.value
        if not is_group(node):
            types = list(ACTION_TYPES)
            action_type, ok = QInputDialog.getItem(self, "Edit", "Action type:", types, types.index(node.type), False)
            if not ok:
                return
            value, ok = QInputDialog.getText(self, "Edit", "Value:", text=node.value)
            if not ok:
                return
            fields["type"] = action_type
            fields["value"] = value
        if action_type in (NodeType.GROUP.value, NodeType.URL.value):
            prompt = "Default browser (empty = system default):" if is_group(node) else "Browser (empty = default):"
            browser, ok = QInputDialog.getText(self, "Edit", prompt, text=node.browser or "")
            if not ok:
                return
            fields["browser"] = browser
        self.controller.edit_item(path, **fields)

    def delete_item_dialog(self, node):
        message = f'Are you sure you want to delete "{node.label or node.key}"?'
        if is_group(node):
            message += f" This will also delete {len(node.actions)} child items."
        answer = QMessageBox.question(self, "Delete Item", message)
        if answer == QMessageBox.Yes:
            self.controller.delete_item(list(self.session.location) + [node.id])

    def import_dialog(self):
        file_path, _ = QFileDialog.getOpenFileName(self, "Import config", str(Path.home()), "JSON (*.json)")
        if file_path:
            self.controller.import_file(Path(file_path))

    def export_dialog(self):
        default = Path.home() / "Downloads" / EXPORT_FILE_NAME
        file_path, _ = QFileDialog.getSaveFileName(self, "Export config", str(default), "JSON (*.json)")
        if file_path:
            self.controller.export_file(Path(file_path))

    def clear_dialog(self):
        answer = QMessageBox.question(
            self,
            "Clear Configuration",
            "This will delete all your LeaderKey shortcuts. This action cannot be undone.",
        )
        if answer == QMessageBox.Yes:
            self.controller.clear_config()

    def closeEvent(self, event):
        self.session.close()
        super().closeEvent(event)


def build_window(data_dir: Path) -> MainWindow:
    prefs = load_preferences(data_dir / PREFERENCES_FILE_NAME)
    notices = LogNotifier()
    storage = LocalStorage(data_dir / STORAGE_FILE_NAME)
    controller = ConfigController(storage, notifier=notices)
    host = SystemHost(command_log=data_dir / LOGS_DIR_NAME / COMMAND_LOG_FILE_NAME)
    session = NavigationSession(
        controller.config,
        ActionDispatcher(host, notifier=notices),
        notifier=notices,
        timeout_ms=timeout_ms(prefs),
    )
    controller.bind_session(session)
    return MainWindow(controller, session, notices)


def main() -> int:
    app = QApplication(sys.argv)
    data_dir = default_data_dir()
    setup_logger(data_dir / LOGS_DIR_NAME)
    w = build_window(data_dir)
    w.resize(WINDOW_WIDTH, WINDOW_HEIGHT)
    w.show()
    return app.exec()
