# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
表示ウィジェット、60Hzのフレームループ、キー入力、ビープ音出力を保持します。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent, QKeySequence
from PySide6.QtCore import QTimer, Slot

from retro_chip8.core.errors import Chip8Error, UnsupportedOpcodeError
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.loader.loader import RomLoader
from .display_view import DisplayView
from .keymap import KeyMapper
from .audio_output import Beeper

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 1000 // 60

# @intent:responsibility エミュレーションのホストとしてコアを駆動し、入出力を仲介します。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    コアは単一スレッド（GUIスレッド）からのみ呼び出されます。
    """
    def __init__(self, cpu: Chip8Cpu, config: EmulatorConfig, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Retro CHIP-8")
        self._cpu = cpu
        self._config = config
        self._key_mapper = KeyMapper(config.keymap)
        self._rom_loaded = bool(cpu.program)
        self._paused = False
        self._halted = False

        self._display = DisplayView(config.display.scale, config.display.foreground,
                                    config.display.background, self)
        self.setCentralWidget(self._display)
        self._create_menus()
        self.statusBar().showMessage("Ready" if self._rom_loaded else "Open a ROM to start")

        self._beeper: Optional[Beeper] = None
        if config.audio.enabled:
            self._beeper = Beeper(config.audio, lambda: self._cpu.sound_timer > 0, self)
            self._beeper.start()

        self._timer = QTimer(self)
        self._timer.timeout.connect(self.run_frame)
        self._timer.start(FRAME_INTERVAL_MS)

    # @intent:responsibility メニューバーを作成し、ROMの読み込みと実行制御のアクションを追加します。
    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.open_action = QAction("Open ROM...", self)
        self.open_action.setShortcut(QKeySequence.StandardKey.Open)
        self.open_action.triggered.connect(self._open_rom_dialog)
        file_menu.addAction(self.open_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self.reset)
        file_menu.addAction(self.reset_action)

        self.pause_action = QAction("Pause", self)
        self.pause_action.setCheckable(True)
        self.pause_action.toggled.connect(self.set_paused)
        file_menu.addAction(self.pause_action)

        file_menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    @property
    def display_view(self) -> DisplayView:
        return self._display

    @property
    def is_halted(self) -> bool:
        return self._halted

    # @intent:responsibility 1フレーム分（cycles_per_frame命令）を実行し、表示を更新します。
    # @intent:rationale キー待ち中はstepを呼び出さず、キー入力を待ちます。
    @Slot()
    def run_frame(self) -> None:
        if self._rom_loaded and not self._paused and not self._halted:
            for _ in range(self._config.cpu.cycles_per_frame):
                if self._cpu.is_awaiting_key():
                    break
                try:
                    self._cpu.step()
                except Chip8Error as e:
                    self._handle_error(e)
                    if self._halted:
                        break
        self._display.set_frame(self._cpu.frame_snapshot())

    # @intent:responsibility コアのエラーを記録し、停止するか不正な命令ワードを読み飛ばして続行します。
    # @intent:rationale 読み飛ばすのは不正な命令ワードのみ。事前条件違反では常に停止します。
    def _handle_error(self, error: Chip8Error) -> None:
        logger.error("%s", error)
        if self._config.cpu.halt_on_error or not isinstance(error, UnsupportedOpcodeError):
            self._halted = True
            self.statusBar().showMessage(f"Halted: {error}")
            return
        self.statusBar().showMessage(str(error))
        # 不正な命令ワードを読み飛ばして続行する
        state = self._cpu.get_state()
        state.pc = (state.pc + 2) & 0xFFFF

    # @intent:responsibility ROMファイルを読み込み、実行を再開します。
    def open_rom(self, path: str) -> bool:
        try:
            RomLoader().load_into(path, self._cpu)
        except (OSError, ValueError) as e:
            logger.error("Failed to load ROM %s: %s", path, e)
            QMessageBox.warning(self, "Open ROM", f"Failed to load ROM:\n{e}")
            return False
        self._rom_loaded = True
        self._halted = False
        self.statusBar().showMessage(f"Loaded {path}")
        return True

    def _open_rom_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if path:
            self.open_rom(path)

    @Slot()
    def reset(self) -> None:
        self._cpu.reset()
        self._halted = False
        self.statusBar().showMessage("Reset")

    @Slot(bool)
    def set_paused(self, paused: bool) -> None:
        self._paused = paused
        self.statusBar().showMessage("Paused" if paused else "Running")

    # @intent:responsibility キー押下をキーボード状態へ反映し、キー待ち中であればキーを渡します。
    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = self._key_mapper.lookup(event.key())
        if key is None:
            super().keyPressEvent(event)
            return
        if event.isAutoRepeat():
            return
        self._cpu.keyboard.press(key)
        if self._cpu.is_awaiting_key():
            self._cpu.deliver_key(key)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        key = self._key_mapper.lookup(event.key())
        if key is None:
            super().keyReleaseEvent(event)
            return
        if event.isAutoRepeat():
            return
        self._cpu.keyboard.release(key)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._timer.stop()
        if self._beeper is not None:
            self._beeper.stop()
        super().closeEvent(event)
