"""Pulsing placeholder rows shown under the table header while users load."""

from __future__ import annotations
from typing import Optional
from PyQt6.QtWidgets import (
    QFrame,
    QGraphicsOpacityEffect,
    QGridLayout,
    QSizePolicy,
    QWidget,
)
from PyQt6.QtCore import QEasingCurve, QPropertyAnimation

__all__ = ["SkeletonLoaderWidget"]

BLOCK_HEIGHT = 16
PULSE_MS = 1000
DIMMEST_OPACITY = 0.4


class SkeletonLoaderWidget(QWidget):
    """A ``rows`` x ``columns`` grid of grey blocks.

    ``start()`` shows the grid and, when ``pulse`` is set, loops its opacity
    1.0 -> 0.4 -> 1.0. ``stop()`` hides it again and may be called any number
    of times.
    """

    def __init__(
        self,
        rows: int = 5,
        columns: int = 8,
        parent: Optional[QWidget] = None,
        *,
        pulse: bool = True,
    ):
        super().__init__(parent)
        self.setObjectName("skeletonLoader")
        self._pulse = pulse
        self._running = False
        self._animation: Optional[QPropertyAnimation] = None
        self._rows = max(1, rows)
        grid = QGridLayout(self)
        grid.setContentsMargins(0, 0, 0, 0)
        grid.setHorizontalSpacing(8)
        grid.setVerticalSpacing(6)
        for r in range(self._rows):
            for c in range(max(1, columns)):
                grid.addWidget(self._block(), r, c)
        self.hide()

    def _block(self) -> QFrame:
        block = QFrame(self)
        block.setObjectName("skeleton_rect")
        block.setFixedHeight(BLOCK_HEIGHT)
        block.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        return block

    def start(self) -> None:
        self._running = True
        self.show()
        if not self._pulse or self._animation is not None:
            return
        effect = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(effect)
        animation = QPropertyAnimation(effect, b"opacity", self)
        animation.setDuration(PULSE_MS)
        animation.setKeyValueAt(0.0, 1.0)
        animation.setKeyValueAt(0.5, DIMMEST_OPACITY)
        animation.setKeyValueAt(1.0, 1.0)
        animation.setEasingCurve(QEasingCurve.Type.InOutSine)
        animation.setLoopCount(-1)
        animation.start()
        self._animation = animation

    def stop(self) -> None:
        if self._animation is not None:
            self._animation.stop()
            self._animation = None
            self.setGraphicsEffect(None)
        self._running = False
        self.hide()

    def is_active(self) -> bool:
        return self._running

    def is_pulsing(self) -> bool:
        return self._animation is not None

    def row_count(self) -> int:
        return self._rows
