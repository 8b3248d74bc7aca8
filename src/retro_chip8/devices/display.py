# retro_chip8/devices/display.py
"""
モノクロ 64x32 フレームバッファ。

スプライトのXOR合成と衝突検出を行い、レンダラへはコピーしたフレームだけを渡します。
"""
import threading
from typing import Iterable, List, Tuple

WIDTH = 64
HEIGHT = 32
PIXEL_ON = 0xFFFFFFFF
PIXEL_OFF = 0x00000000
SPRITE_WIDTH = 8

# @intent:responsibility 表示バッファの保持と描画操作を提供します。
class Display:
    """
    `x + y * 64` でインデックスされる2048セルのフレームバッファ。
    各セルは点灯時 0xFFFFFFFF (不透明)、消灯時 0 を保持します。
    """
    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        self.width = width
        self.height = height
        self._buffer: List[int] = [PIXEL_OFF] * (width * height)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._buffer)

    def __getitem__(self, index: int) -> int:
        return self._buffer[index]

    # @intent:responsibility 全てのセルを消灯します。
    def clear(self) -> None:
        with self._lock:
            for i in range(len(self._buffer)):
                self._buffer[i] = PIXEL_OFF

    def is_on(self, x: int, y: int) -> bool:
        return self._buffer[x + y * self.width] != PIXEL_OFF

    # @intent:responsibility スプライトをXOR合成し、点灯から消灯へ変化したピクセルがあればTrueを返します。
    # @intent:pre-condition `rows`の各要素は8bit値で、最上位ビットが左端のピクセルです。
    # @intent:rationale 行末を越えたピクセルは次の行へ続き、バッファ外のインデックスは描画されず破棄されます。
    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        collision = False
        size = len(self._buffer)
        with self._lock:
            for row, bits in enumerate(rows):
                for col in range(SPRITE_WIDTH):
                    if not (bits >> (7 - col)) & 0x01:
                        continue
                    index = x + col + (y + row) * self.width
                    if index >= size:
                        continue
                    if self._buffer[index] != PIXEL_OFF:
                        collision = True
                        self._buffer[index] = PIXEL_OFF
                    else:
                        self._buffer[index] = PIXEL_ON
        return collision

    # @intent:responsibility ロックを取った上でバッファ全体のコピーを返します。
    def copy(self) -> Tuple[int, ...]:
        with self._lock:
            return tuple(self._buffer)
