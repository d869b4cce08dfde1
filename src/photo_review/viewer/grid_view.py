"""Filtered thumbnail grid shown below the current photo."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QMouseEvent, QPixmap
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from photo_review.gallery.models import SENTINEL_TAG, UNTAGGED_FILTER
from photo_review.review.preview import Thumbnail
from photo_review.viewer.thumbnail_worker import ThumbnailWorker


def filter_label(name: str) -> str:
    if name == SENTINEL_TAG:
        return "All"
    if name == UNTAGGED_FILTER:
        return "Untagged"
    return name


class ThumbnailCell(QFrame):
    """A single thumbnail cell in the grid."""

    clicked = pyqtSignal(int)

    def __init__(self, position: int, thumb: Thumbnail, thumb_size: int, parent=None):
        super().__init__(parent)
        self._position = position
        self._thumb = thumb
        self._thumb_size = thumb_size
        self._current = False

        self.setFixedSize(thumb_size + 16, thumb_size + 36)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(thumb.alt or thumb.photo_id)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        self._image_label = QLabel()
        self._image_label.setFixedSize(thumb_size, thumb_size)
        self._image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._image_label.setStyleSheet("background-color: #1a1a1a; color: #666666;")
        self._image_label.setText(f"{thumb.width}×{thumb.height}")
        layout.addWidget(self._image_label)

        name = thumb.photo_id
        if len(name) > 20:
            name = name[:17] + "..."
        self._name_label = QLabel(name)
        self._name_label.setFixedHeight(20)
        self._name_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._name_label.setStyleSheet("color: #cccccc; font-size: 10px;")
        layout.addWidget(self._name_label)

        self._update_style()

    @property
    def thumb(self) -> Thumbnail:
        return self._thumb

    def set_current(self, value: bool) -> None:
        if value == self._current:
            return
        self._current = value
        self._update_style()

    def set_thumbnail(self, pixmap: QPixmap) -> None:
        scaled = pixmap.scaled(
            self._thumb_size, self._thumb_size,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._image_label.setPixmap(scaled)

    def _update_style(self) -> None:
        if self._current:
            self.setStyleSheet(
                "ThumbnailCell { border: 2px solid #4CAF50; "
                "background-color: #243024; }"
            )
        else:
            self.setStyleSheet(
                "ThumbnailCell { border: 1px solid #333333; "
                "background-color: #1e1e1e; }"
            )

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self._position)


class _GridContainer(QWidget):
    """Inner widget that holds the grid of thumbnail cells."""

    def __init__(self, columns: int, thumb_size: int, parent=None):
        super().__init__(parent)
        self._cells: list[ThumbnailCell] = []
        self._columns = max(1, columns)
        self._thumb_size = thumb_size

    def set_cells(self, cells: list[ThumbnailCell]) -> None:
        for old in self._cells:
            old.deleteLater()
        self._cells = cells
        for cell in cells:
            cell.setParent(self)
        self._layout_cells()

    def _layout_cells(self) -> None:
        cell_w = self._thumb_size + 16
        cell_h = self._thumb_size + 36
        spacing = 6

        for i, cell in enumerate(self._cells):
            row = i // self._columns
            col = i % self._columns
            cell.move(col * (cell_w + spacing) + spacing, row * (cell_h + spacing) + spacing)
            cell.show()

        rows = (len(self._cells) + self._columns - 1) // self._columns
        total_w = self._columns * (cell_w + spacing) + spacing
        total_h = rows * (cell_h + spacing) + spacing
        self.setMinimumSize(total_w, total_h)
        self.resize(total_w, total_h)


class PreviewGrid(QWidget):
    """Filter buttons plus a scrollable grid of the filtered photos.

    ``thumbnail_clicked`` carries the position in the list most recently
    passed to ``set_thumbnails``.
    """

    filter_selected = pyqtSignal(str)
    thumbnail_clicked = pyqtSignal(int)

    def __init__(
        self,
        filters: tuple[str, ...],
        thumb_worker: ThumbnailWorker,
        columns: int = 6,
        thumb_size: int = 150,
        parent=None,
    ):
        super().__init__(parent)
        self._thumb_worker = thumb_worker
        self._thumb_size = thumb_size
        self._cells: list[ThumbnailCell] = []
        self._thumbnails: list[Thumbnail] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 12, 0, 0)

        title = QLabel("Gallery preview")
        title.setStyleSheet("font-weight: bold; font-size: 14px;")
        layout.addWidget(title)

        button_row = QHBoxLayout()
        self._filter_buttons: dict[str, QPushButton] = {}
        for name in filters:
            button = QPushButton(filter_label(name))
            button.setCheckable(True)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.clicked.connect(lambda _checked, n=name: self.filter_selected.emit(n))
            button_row.addWidget(button)
            self._filter_buttons[name] = button
        button_row.addStretch()
        layout.addLayout(button_row)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(False)
        self._scroll.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._scroll.setStyleSheet("background-color: #111111;")
        self._container = _GridContainer(columns, thumb_size)
        self._scroll.setWidget(self._container)
        layout.addWidget(self._scroll)

        self._thumb_worker.thumbnail_ready.connect(self._on_thumbnail_ready)

    @property
    def thumbnails(self) -> list[Thumbnail]:
        return list(self._thumbnails)

    def set_active_filter(self, name: str) -> None:
        for key, button in self._filter_buttons.items():
            button.setChecked(key == name)
            button.setStyleSheet(
                "background-color: green; color: white; font-weight: bold;"
                if key == name else ""
            )

    def set_thumbnails(self, thumbnails: list[Thumbnail], current_index: int | None) -> None:
        """Show a filtered list, highlighting the photo at current_index.

        The cells are only rebuilt when the list differs from the one shown.
        """
        thumbnails = list(thumbnails)
        if thumbnails == self._thumbnails and self._cells:
            for cell in self._cells:
                cell.set_current(cell.thumb.index == current_index)
            return

        self._thumbnails = thumbnails
        self._cells = []
        for position, thumb in enumerate(self._thumbnails):
            cell = ThumbnailCell(position, thumb, self._thumb_size)
            cell.set_current(thumb.index == current_index)
            cell.clicked.connect(self.thumbnail_clicked.emit)
            cached = self._thumb_worker.request(thumb.src)
            if cached is not None:
                cell.set_thumbnail(cached)
            self._cells.append(cell)
        self._container.set_cells(self._cells)

    def _on_thumbnail_ready(self, src: str, pixmap: QPixmap) -> None:
        for cell in self._cells:
            if cell.thumb.src == src:
                cell.set_thumbnail(pixmap)
