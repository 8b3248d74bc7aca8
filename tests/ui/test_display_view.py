import sys
import unittest

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QColor

from retro_chip8.core.snapshot import FrameSnapshot
from retro_chip8.devices.display import WIDTH, HEIGHT, PIXEL_ON, PIXEL_OFF
from retro_chip8.ui.display_view import DisplayView


def make_frame(lit):
    pixels = [PIXEL_OFF] * (WIDTH * HEIGHT)
    for x, y in lit:
        pixels[x + y * WIDTH] = PIXEL_ON
    return FrameSnapshot(WIDTH, HEIGHT, tuple(pixels))


class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_scaled_size(self):
        view = DisplayView(scale=8)
        self.assertEqual(view.width(), WIDTH * 8)
        self.assertEqual(view.height(), HEIGHT * 8)

    def test_set_frame_renders_pixels(self):
        view = DisplayView(foreground="#00FF00", background="#000000")
        view.set_frame(make_frame([(0, 0), (63, 31), (10, 5)]))
        image = view.image()
        self.assertEqual(image.width(), WIDTH)
        self.assertEqual(image.height(), HEIGHT)
        self.assertEqual(image.pixelColor(0, 0), QColor("#00FF00"))
        self.assertEqual(image.pixelColor(63, 31), QColor("#00FF00"))
        self.assertEqual(image.pixelColor(10, 5), QColor("#00FF00"))
        self.assertEqual(image.pixelColor(1, 0), QColor("#000000"))

    def test_new_frame_replaces_old(self):
        view = DisplayView()
        view.set_frame(make_frame([(3, 3)]))
        view.set_frame(make_frame([(4, 4)]))
        image = view.image()
        self.assertEqual(image.pixelColor(3, 3), QColor("#000000"))
        self.assertEqual(image.pixelColor(4, 4), QColor("#FFFFFF"))


if __name__ == '__main__':
    unittest.main()
