import os

import pytest

# UIテストはディスプレイのない環境でも動作させる
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


# PySide6のテストにはQApplicationのインスタンスが必要
@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeClock:
    """手動で進める単調時計。"""
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()
