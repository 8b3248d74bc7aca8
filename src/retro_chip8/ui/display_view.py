# src/retro_chip8/ui/display_view.py
"""
フレームバッファ表示ウィジェット。
コアから受け取ったFrameSnapshotだけを描画し、稼働中のバッファには触れません。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QImage

from retro_chip8.core.snapshot import FrameSnapshot
from retro_chip8.devices.display import WIDTH, HEIGHT

# @intent:responsibility 64x32のフレームを整数倍に拡大して表示します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, foreground: str = "#FFFFFF", background: str = "#000000", parent=None):
        super().__init__(parent)
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._image = QImage(WIDTH, HEIGHT, QImage.Format.Format_RGB32)
        self._image.fill(self._background)
        self._frame: Optional[FrameSnapshot] = None
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        return QSize(WIDTH * self._scale, HEIGHT * self._scale)

    # @intent:responsibility 新しいフレームを受け取り、画像へ変換して再描画を要求します。
    def set_frame(self, frame: FrameSnapshot) -> None:
        if frame == self._frame:
            return
        self._frame = frame
        if (self._image.width(), self._image.height()) != (frame.width, frame.height):
            self._image = QImage(frame.width, frame.height, QImage.Format.Format_RGB32)
        self._image.fill(self._background)
        fg = self._foreground.rgb()
        for index, value in enumerate(frame.pixels):
            if value:
                self._image.setPixel(index % frame.width, index // frame.width, fg)
        self.update()

    def image(self) -> QImage:
        return self._image

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(self.rect(), self._image)
        painter.end()
