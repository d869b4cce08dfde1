"""Main window composing all review components."""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from photo_review.config.config import ConfigManager
from photo_review.review.session import ReviewSession
from photo_review.viewer.grid_view import PreviewGrid
from photo_review.viewer.image_canvas import ImageCanvas
from photo_review.viewer.image_loader import ImageCache, load_pixmap
from photo_review.viewer.key_handler import Action, KeyHandler
from photo_review.viewer.thumbnail_worker import ThumbnailWorker


def shortcut_help(bindings: dict[str, str]) -> str:
    keys = " | ".join(f"<b>{key}:</b> {tag}" for key, tag in bindings.items())
    return (
        "<b>Keyboard shortcuts</b><br>"
        f"Tags: {keys}<br>"
        "<b>Next:</b> Space &nbsp; <b>Previous:</b> B"
    )


class MainWindow(QMainWindow):
    """Photo review main window."""

    def __init__(
        self,
        session: ReviewSession,
        media_root: str | Path,
        config: ConfigManager | None = None,
        start_fullscreen: bool | None = None,
    ):
        super().__init__()
        self._config = config or ConfigManager()
        self._session = session
        self._media_root = Path(media_root)
        self._image_cache = ImageCache(int(self._config.get("ui.image_cache_mb", 256)))
        self._shown: tuple[str, str] | None = None

        self.setWindowTitle("Photo Review")
        w = self._config.get("ui.default_window_width", 1400)
        h = self._config.get("ui.default_window_height", 900)
        self.resize(w, h)

        bindings = self._config.get("review.tag_keybindings", {}) or {}
        self._key_handler = KeyHandler(bindings, self)
        self._key_handler.action_triggered.connect(self._on_action)
        self._key_handler.tag_toggled.connect(self._session.toggle_tag)

        thumb = int(self._config.get("preview.thumbnail_size", 150))
        self._thumb_worker = ThumbnailWorker(self._media_root, (thumb, thumb), parent=self)

        if session.is_empty:
            placeholder = QLabel("No photos")
            placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self.setCentralWidget(placeholder)
        else:
            self._build_ui(bindings, thumb)
            self._session.add_listener(self._refresh)
            self._refresh()

        fs = start_fullscreen
        if fs is None:
            fs = self._config.get("ui.start_fullscreen", False)
        if fs:
            self.showFullScreen()

    def _build_ui(self, bindings: dict[str, str], thumb_size: int) -> None:
        root = QWidget()
        layout = QVBoxLayout(root)
        layout.setContentsMargins(16, 16, 16, 16)

        help_label = QLabel(shortcut_help(bindings))
        help_label.setTextFormat(Qt.TextFormat.RichText)
        help_label.setStyleSheet(
            "background: #2a2a2a; border: 1px solid #444444; border-radius: 6px;"
            "padding: 12px; color: #e0e0e0;"
        )
        layout.addWidget(help_label)

        nav_row = QHBoxLayout()
        self._prev_button = QPushButton("Previous")
        self._prev_button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._prev_button.clicked.connect(self._session.previous)
        self._next_button = QPushButton("Next")
        self._next_button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._next_button.clicked.connect(self._session.next)
        self._position_label = QLabel()
        nav_row.addWidget(self._prev_button)
        nav_row.addWidget(self._next_button)
        nav_row.addWidget(self._position_label)
        nav_row.addStretch()
        layout.addLayout(nav_row)

        body = QHBoxLayout()
        viewer_col = QVBoxLayout()
        self._id_label = QLabel()
        self._id_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        viewer_col.addWidget(self._id_label)
        self._canvas = ImageCanvas()
        self._canvas.setMinimumSize(1000, 600)
        viewer_col.addWidget(self._canvas)
        body.addLayout(viewer_col, 1)

        tag_col = QVBoxLayout()
        tag_col.addWidget(QLabel("<h4>Tags</h4>"))
        self._tag_buttons: dict[str, QPushButton] = {}
        for tag in self._session.vocabulary:
            button = QPushButton(tag)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.clicked.connect(lambda _checked, t=tag: self._session.toggle_tag(t))
            tag_col.addWidget(button)
            self._tag_buttons[tag] = button
        tag_col.addSpacing(16)
        tag_col.addWidget(QLabel("<b>Current tags:</b>"))
        self._current_tags_label = QLabel()
        self._current_tags_label.setWordWrap(True)
        tag_col.addWidget(self._current_tags_label)
        tag_col.addStretch()
        tag_panel = QWidget()
        tag_panel.setFixedWidth(220)
        tag_panel.setLayout(tag_col)
        body.addWidget(tag_panel)
        layout.addLayout(body)

        self._preview = PreviewGrid(
            self._session.preview.choices,
            self._thumb_worker,
            columns=int(self._config.get("preview.columns", 6)),
            thumb_size=thumb_size,
        )
        self._preview.setMinimumHeight(thumb_size * 2 + 120)
        self._preview.filter_selected.connect(self._session.set_filter)
        self._preview.thumbnail_clicked.connect(self._on_thumbnail_clicked)
        layout.addWidget(self._preview)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._scroll.setWidget(root)
        self.setCentralWidget(self._scroll)

    def _refresh(self) -> None:
        photo = self._session.current_photo
        if photo is None:
            return
        total = self._session.total
        self._position_label.setText(f"{self._session.cursor + 1} / {total}")
        self._prev_button.setEnabled(self._session.has_previous())
        self._next_button.setEnabled(self._session.has_next())

        self._id_label.setText(photo.id)
        if (photo.src, photo.alt) != self._shown:
            self._canvas.set_image(self._load_image(photo.src), photo.alt)
            self._shown = (photo.src, photo.alt)
        self.setWindowTitle(f"{photo.id} [{self._session.cursor + 1}/{total}] - Photo Review")

        for tag, button in self._tag_buttons.items():
            button.setStyleSheet(
                "background-color: green; color: white;" if photo.has_tag(tag) else ""
            )
        self._current_tags_label.setText("  ".join(f"[{t}]" for t in photo.tags))

        self._preview.set_active_filter(self._session.active_filter)
        self._preview.set_thumbnails(self._session.thumbnails(), self._session.current_index)

    def _load_image(self, src: str):
        pixmap = self._image_cache.get(src)
        if pixmap is None:
            pixmap = load_pixmap(src, self._media_root)
            if pixmap is not None:
                self._image_cache.put(src, pixmap)
        return pixmap

    def _on_thumbnail_clicked(self, position: int) -> None:
        if self._session.click_thumbnail(position, self._preview.thumbnails):
            self._scroll.verticalScrollBar().setValue(0)

    def _on_action(self, action: Action) -> None:
        if action == Action.NEXT_PHOTO:
            self._session.next()
        elif action == Action.PREV_PHOTO:
            self._session.previous()
        elif action == Action.QUIT:
            self.close()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if not self._key_handler.handle_key_event(event):
            super().keyPressEvent(event)

    def closeEvent(self, event) -> None:
        self._thumb_worker.shutdown()
        self._session.close()
        super().closeEvent(event)
