"""Widget that shows the current photo scaled to fit."""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QColor, QPainter, QPixmap
from PyQt6.QtWidgets import QSizePolicy, QWidget


class ImageCanvas(QWidget):
    """Draws a pixmap centered and aspect-fit, or the alt text when there is none."""

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 240)
        self._pixmap: QPixmap | None = None
        self._alt = ""

    def set_image(self, pixmap: QPixmap | None, alt: str = "") -> None:
        self._pixmap = pixmap
        self._alt = alt
        self.update()

    def clear(self) -> None:
        self.set_image(None)

    def _fit_rect(self) -> QRectF:
        img_w, img_h = self._pixmap.width(), self._pixmap.height()
        scale = min(self.width() / img_w, self.height() / img_h)
        w, h = img_w * scale, img_h * scale
        return QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), QColor("#111111"))
        painter.setPen(QColor("#333333"))
        painter.drawRect(self.rect().adjusted(0, 0, -1, -1))

        if self._pixmap is None or self._pixmap.isNull():
            painter.setPen(QColor("#888888"))
            painter.drawText(
                self.rect(), Qt.AlignmentFlag.AlignCenter, self._alt or "Image unavailable"
            )
        else:
            painter.drawPixmap(self._fit_rect(), self._pixmap, QRectF(self._pixmap.rect()))
        painter.end()
