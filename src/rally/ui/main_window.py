from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import Qt

from rally.contracts import ActionRequest, ActionResult, ActionType, GameFormat, Position
from rally.core import make_id
from rally.draw import SUPPORTED_TEAM_COUNTS

ActionHandler = Callable[[ActionRequest], ActionResult]

POSITION_LABELS = {
    Position.SETTER.value: "Setter",
    Position.LIBERO.value: "Libero",
    Position.GENERIC.value: "Player",
}

FORMAT_LABELS = {
    GameFormat.SMALL.value: "Small (4 per team)",
    GameFormat.LARGE.value: "Large (6 per team)",
}


class MainWindowFactory:
    def create(self, action_handler: ActionHandler):
        from PySide6.QtWidgets import (
            QAbstractItemView,
            QComboBox,
            QGridLayout,
            QHBoxLayout,
            QHeaderView,
            QLabel,
            QLineEdit,
            QListWidget,
            QListWidgetItem,
            QMainWindow,
            QMessageBox,
            QPushButton,
            QSplitter,
            QTableWidget,
            QTableWidgetItem,
            QTabWidget,
            QTextEdit,
            QVBoxLayout,
            QWidget,
        )

        class MainWindow(QMainWindow):
            def __init__(self) -> None:
                super().__init__()
                self.setWindowTitle("Rally Draw")
                self.resize(1100, 760)
                self._last_draw: dict[str, Any] | None = None

                self.output = QTextEdit()
                self.output.setReadOnly(True)
                self.output.document().setMaximumBlockCount(500)

                tabs = QTabWidget()
                tabs.addTab(self._players_tab(), "Players")
                tabs.addTab(self._draw_tab(), "Draw")
                tabs.addTab(self._history_tab(), "History")

                root = QWidget()
                layout = QVBoxLayout(root)
                splitter = QSplitter()
                splitter.setOrientation(Qt.Orientation.Vertical)
                splitter.addWidget(tabs)
                splitter.addWidget(self.output)
                splitter.setSizes([600, 140])
                layout.addWidget(splitter)
                self.setCentralWidget(root)
                self.statusBar().showMessage("Ready")

                self._refresh_players()
                self._refresh_history()

            def _dispatch(self, action: ActionType, payload: dict[str, Any], *, log: bool = True) -> ActionResult:
                result = action_handler(ActionRequest(make_id("req"), action, payload))
                if log:
                    state = "OK" if result.success else "FAIL"
                    self.output.append(f"[{state}] {action.value}: {result.message}")
                self.statusBar().showMessage(f"{action.value}: {'ok' if result.success else 'failed'}", 4000)
                if not result.success and log:
                    QMessageBox.warning(self, "Action failed", result.message)
                return result

            def _configure_table(self, table: QTableWidget) -> None:
                table.setAlternatingRowColors(True)
                table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
                table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
                table.setSortingEnabled(True)
                header = table.horizontalHeader()
                header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
                header.setStretchLastSection(True)

            def _players_tab(self):
                w = QWidget()
                layout = QVBoxLayout(w)
                form = QGridLayout()
                self.player_name = QLineEdit()
                self.player_name.setPlaceholderText("Player name")
                self.player_position = QComboBox()
                for value, label in POSITION_LABELS.items():
                    self.player_position.addItem(label, value)
                add = QPushButton("Add Player")
                add.clicked.connect(self._add_player)
                self.player_name.returnPressed.connect(self._add_player)
                form.addWidget(QLabel("Name"), 0, 0)
                form.addWidget(self.player_name, 0, 1)
                form.addWidget(QLabel("Position"), 0, 2)
                form.addWidget(self.player_position, 0, 3)
                form.addWidget(add, 0, 4)

                self.players_table = QTableWidget(0, 3)
                self.players_table.setHorizontalHeaderLabels(["Id", "Name", "Position"])
                self._configure_table(self.players_table)
                remove = QPushButton("Remove Selected")
                remove.clicked.connect(self._remove_player)
                self.roster_summary = QLabel()
                self.roster_summary.setWordWrap(True)

                layout.addLayout(form)
                layout.addWidget(self.players_table)
                row = QHBoxLayout()
                row.addWidget(self.roster_summary, 1)
                row.addWidget(remove)
                layout.addLayout(row)
                return w

            def _draw_tab(self):
                w = QWidget()
                layout = QVBoxLayout(w)
                controls = QHBoxLayout()
                self.game_format = QComboBox()
                for value, label in FORMAT_LABELS.items():
                    self.game_format.addItem(label, value)
                self.game_format.setCurrentIndex(self.game_format.findData(GameFormat.LARGE.value))
                self.team_count = QComboBox()
                for n in SUPPORTED_TEAM_COUNTS:
                    self.team_count.addItem(f"{n} teams", n)
                draw = QPushButton("Draw Teams")
                draw.clicked.connect(self._draw)
                save = QPushButton("Save to History")
                save.clicked.connect(self._save_draw)
                controls.addWidget(QLabel("Format"))
                controls.addWidget(self.game_format)
                controls.addWidget(QLabel("Teams"))
                controls.addWidget(self.team_count)
                controls.addWidget(draw)
                controls.addWidget(save)
                controls.addStretch(1)
                self.teams_view = QTextEdit()
                self.teams_view.setReadOnly(True)
                layout.addLayout(controls)
                layout.addWidget(self.teams_view)
                return w

            def _history_tab(self):
                w = QWidget()
                layout = QVBoxLayout(w)
                self.history = QListWidget()
                self.history.currentItemChanged.connect(self._show_session)
                self.history_detail = QTextEdit()
                self.history_detail.setReadOnly(True)
                remove = QPushButton("Delete Selected Draw")
                remove.clicked.connect(self._delete_session)
                layout.addWidget(self.history)
                layout.addWidget(self.history_detail)
                layout.addWidget(remove)
                return w

            def _add_player(self) -> None:
                payload = {"name": self.player_name.text(), "position": self.player_position.currentData()}
                result = self._dispatch(ActionType.CREATE_PLAYER, payload)
                if result.success:
                    self.player_name.clear()
                    self._refresh_players()

            def _remove_player(self) -> None:
                row = self.players_table.currentRow()
                if row < 0:
                    return
                item = self.players_table.item(row, 0)
                if item is None:
                    return
                self._dispatch(ActionType.DELETE_PLAYER, {"player_id": int(item.text())})
                self._refresh_players()

            def _refresh_players(self) -> None:
                result = self._dispatch(ActionType.LIST_PLAYERS, {}, log=False)
                rows = result.data.get("players", []) if result.success else []
                self.players_table.setSortingEnabled(False)
                self.players_table.setRowCount(len(rows))
                for i, row in enumerate(rows):
                    values = [row["id"], row["name"], POSITION_LABELS.get(row["position"], row["position"])]
                    for j, value in enumerate(values):
                        self.players_table.setItem(i, j, QTableWidgetItem(str(value)))
                self.players_table.setSortingEnabled(True)

                summary = self._dispatch(ActionType.GET_ROSTER_SUMMARY, {}, log=False)
                if summary.success:
                    s = summary.data["summary"]
                    self.roster_summary.setText(
                        f"{s['total']} players: {s['setters']} setters, {s['liberos']} liberos, "
                        f"{s['generics']} others. Complete teams possible: "
                        f"small {s['max_teams']['small']}, large {s['max_teams']['large']}. "
                        "Each team needs one setter and one libero."
                    )

            def _draw(self) -> None:
                payload = {"game_format": self.game_format.currentData(), "team_count": self.team_count.currentData()}
                result = self._dispatch(ActionType.DRAW_TEAMS, payload)
                if not result.success:
                    return
                self._last_draw = result.data
                self.teams_view.setPlainText(self._format_teams(result.data["teams"]))

            def _save_draw(self) -> None:
                if self._last_draw is None:
                    QMessageBox.information(self, "Nothing to save", "Draw the teams before saving.")
                    return
                result = self._dispatch(ActionType.SAVE_SESSION, self._last_draw)
                if result.success:
                    self._refresh_history()

            def _refresh_history(self) -> None:
                result = self._dispatch(ActionType.LIST_SESSIONS, {}, log=False)
                self.history.clear()
                self.history_detail.clear()
                if not result.success:
                    return
                for session in result.data["sessions"]:
                    label = (
                        f"Draw {session['id']} - {session['created_at']} - "
                        f"{FORMAT_LABELS[session['game_format']]}, {session['team_count']} teams, "
                        f"{session['player_count']} players"
                    )
                    item = QListWidgetItem(label)
                    item.setData(Qt.ItemDataRole.UserRole, session)
                    self.history.addItem(item)

            def _show_session(self, item: Any = None, _previous: Any = None) -> None:
                if item is None:
                    self.history_detail.clear()
                    return
                session = item.data(Qt.ItemDataRole.UserRole)
                self.history_detail.setPlainText(self._format_teams(session["teams"]))

            def _delete_session(self) -> None:
                item = self.history.currentItem()
                if item is None:
                    return
                session = item.data(Qt.ItemDataRole.UserRole)
                self._dispatch(ActionType.DELETE_SESSION, {"session_id": session["id"]})
                self._refresh_history()

            @staticmethod
            def _format_teams(teams: list[dict[str, Any]]) -> str:
                blocks = []
                for team in teams:
                    lines = [
                        f"{team['name']} ({team['colors']['name']})",
                        f"  Setter: {team['setter']['name']}",
                        f"  Libero: {team['libero']['name']}",
                    ]
                    lines.extend(f"  Player: {p['name']}" for p in team["generics"])
                    blocks.append("\n".join(lines))
                return "\n\n".join(blocks)

        return MainWindow()


def launch_ui(action_handler: ActionHandler) -> None:
    from PySide6.QtWidgets import QApplication

    app = QApplication([])
    window = MainWindowFactory().create(action_handler=action_handler)
    window.show()
    app.exec()
