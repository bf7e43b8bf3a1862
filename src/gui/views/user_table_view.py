"""UserTableView

QTableWidget-based view of the fetched users. Backed by
`UserTableViewModel`, which owns the collection and sort state; the view
only redraws from the snapshots the viewmodel publishes.
"""

from __future__ import annotations
from html import escape
from typing import Dict, List, Optional
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QHeaderView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QFont

from config import settings
from gui.components.skeleton_loader import SkeletonLoaderWidget
from gui.services.event_bus import Event, GUIEvent
from gui.services.html_table import COLUMNS, header_labels, render_table_html, row_values
from gui.services.sorting import SortField
from gui.viewmodels.user_table_viewmodel import (
    DisplayRow,
    RowKind,
    TableSnapshot,
    UserTableViewModel,
)

__all__ = ["UserTableView"]

EMAIL_COLUMN = 4
WEBSITE_COLUMN = 6
STRIPE_COLORS = {"even": QColor("#f3f4f6"), "odd": QColor("#ffffff")}


class UserTableView(QWidget):
    def __init__(
        self,
        viewmodel: Optional[UserTableViewModel] = None,
        parent: Optional[QWidget] = None,
        *,
        pulse: bool = True,
    ):
        super().__init__(parent)
        self.viewmodel = viewmodel or UserTableViewModel()
        self._column_fields: Dict[int, SortField] = {
            idx: sort_field for idx, (_, sort_field) in enumerate(COLUMNS) if sort_field
        }
        self._snapshot: TableSnapshot = self.viewmodel.snapshot()
        self._build_ui(pulse)
        self._subscription = self.viewmodel.event_bus.subscribe(
            GUIEvent.STATE_CHANGED, self._on_state_changed
        )
        self.render(self._snapshot)

    def _build_ui(self, pulse: bool):
        root = QVBoxLayout(self)
        self.title_label = QLabel(settings.WINDOW_TITLE)
        self.title_label.setObjectName("viewTitleLabel")
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self.title_label)
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setObjectName("usersTable")
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSortingEnabled(False)
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.setSectionsClickable(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        root.addWidget(self.table)
        self.skeleton = SkeletonLoaderWidget(
            rows=settings.PLACEHOLDER_ROWS, columns=len(COLUMNS), pulse=pulse
        )
        root.addWidget(self.skeleton)
        root.addStretch(1)

    # Rendering ----------------------------------------------------------
    def _on_state_changed(self, event: Event) -> None:
        self.render(event.payload)

    def render(self, snapshot: TableSnapshot) -> None:
        self._snapshot = snapshot
        self.table.setHorizontalHeaderLabels(header_labels(snapshot.sort_config))
        self.table.clearSpans()
        # drop every row (and its link widgets) before redrawing
        self.table.setRowCount(0)
        if snapshot.is_loading:
            self.skeleton.start()
            return
        self.skeleton.stop()
        self.table.setRowCount(len(snapshot.rows))
        for row in snapshot.rows:
            if row.kind is RowKind.EMPTY:
                self._populate_empty_row(row.index)
            elif row.kind is RowKind.DATA:
                self._populate_data_row(row)

    def _populate_empty_row(self, r: int) -> None:
        item = QTableWidgetItem(settings.EMPTY_MESSAGE)
        item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
        font = QFont(item.font())
        font.setItalic(True)
        item.setFont(font)
        item.setForeground(QBrush(QColor("#6b7280")))
        self.table.setItem(r, 0, item)
        self.table.setSpan(r, 0, 1, len(COLUMNS))

    def _populate_data_row(self, row: DisplayRow) -> None:
        user = row.user
        assert user is not None
        background = QBrush(STRIPE_COLORS[row.stripe])
        for c, text in enumerate(row_values(row)):
            item = QTableWidgetItem(text)
            item.setBackground(background)
            self.table.setItem(row.index, c, item)
        self._set_link_cell(row.index, EMAIL_COLUMN, user.mailto_url, user.email)
        self._set_link_cell(row.index, WEBSITE_COLUMN, user.website_url, user.website)

    def _set_link_cell(self, r: int, c: int, href: str, text: str) -> None:
        label = QLabel(f'<a href="{escape(href)}">{escape(text)}</a>')
        label.setTextFormat(Qt.TextFormat.RichText)
        label.setOpenExternalLinks(True)
        label.setStyleSheet("background: transparent;")
        self.table.setCellWidget(r, c, label)

    # Interaction --------------------------------------------------------
    def _on_header_clicked(self, logical_index: int):  # pragma: no cover - UI callback
        self.activate_column(logical_index)

    def activate_column(self, logical_index: int) -> bool:
        """Apply the header activation for ``logical_index``.

        Returns False for columns that are not sortable.
        """
        sort_field = self._column_fields.get(logical_index)
        if sort_field is None:
            return False
        self.viewmodel.activate_sort(sort_field)
        return True

    # Export -------------------------------------------------------------
    def get_export_rows(self) -> tuple[List[str], List[List[str]]]:
        headers = [label for label, _ in COLUMNS]
        return headers, [row_values(r) for r in self._snapshot.data_rows]

    def get_export_html(self) -> str:
        return render_table_html(self._snapshot)

    # Testing helpers ----------------------------------------------------
    def snapshot(self) -> TableSnapshot:
        return self._snapshot

    def header_text(self, column: int) -> str:
        item = self.table.horizontalHeaderItem(column)
        return item.text() if item else ""

    def column_texts(self, column: int) -> List[str]:
        out: List[str] = []
        for r in range(self.table.rowCount()):
            item = self.table.item(r, column)
            out.append(item.text() if item else "")
        return out

    def is_empty_state_active(self) -> bool:
        return any(r.kind is RowKind.EMPTY for r in self._snapshot.rows)

    def detach(self) -> None:
        self.viewmodel.event_bus.unsubscribe(self._subscription)
