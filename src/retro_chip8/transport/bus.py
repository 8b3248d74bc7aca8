# retro_chip8/transport/bus.py
"""
Transport Layer (共通バス)

このモジュールは、4KBのアドレス空間を持つメモリと、命令の実行中にアクセスされる
周辺デバイス（ディスプレイ、キーボード、乱数源）を束ねるバスを提供します。
"""
from typing import Iterable, Optional

from retro_chip8.devices.display import Display
from retro_chip8.devices.keyboard import Keyboard
from retro_chip8.devices.random_source import RandomSource, SeededRandomSource

MEMORY_SIZE = 0x1000
ADDRESS_MASK = MEMORY_SIZE - 1

# @intent:responsibility 4096バイトのアドレス空間を持つRAMデバイスの機能を提供します。
class Memory:
    """
    アドレス空間全体を表すRAMデバイス。
    アドレスは12bitに切り詰められ、0xFFFの次は0x000へ折り返します。
    """
    # @intent:responsibility 指定されたサイズのメモリ領域を初期化します。
    # @intent:pre-condition sizeは正の2の累乗である必要があります。
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0 or size & (size - 1):
            raise ValueError("Memory size must be a positive power of two.")
        self._memory = bytearray(size)
        self._size = size
        self._mask = size - 1

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    def read(self, address: int) -> int:
        return self._memory[address & self._mask]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address & self._mask] = data

    # @intent:utility_function ビッグエンディアン形式で16bitワードを読み込みます。
    def read_word(self, address: int) -> int:
        """Big-endian 16-bit read."""
        return (self.read(address) << 8) | self.read(address + 1)

    # @intent:responsibility 連続したバイト列を指定アドレスから書き込みます（ローダー用）。
    def load_data(self, address: int, data: Iterable[int]) -> None:
        for offset, value in enumerate(data):
            self.write(address + offset, value)

    # @intent:responsibility 全領域を0で埋めます。
    def clear(self) -> None:
        self._memory[:] = bytes(self._size)

    # @intent:responsibility 指定範囲のコピーを返します。
    def dump(self, address: int, length: int) -> bytes:
        return bytes(self.read(address + i) for i in range(length))


# @intent:responsibility 命令の実行に必要なメモリと周辺デバイスへの参照を保持する共通バス。
class Bus:
    """
    メモリアクセスを委譲し、ディスプレイ・キーボード・乱数源を命令実装へ公開する共通バス。
    """
    def __init__(self, memory: Optional[Memory] = None, display: Optional[Display] = None,
                 keyboard: Optional[Keyboard] = None, random_source: Optional[RandomSource] = None):
        self.memory = memory if memory is not None else Memory()
        self.display = display if display is not None else Display()
        self.keyboard = keyboard if keyboard is not None else Keyboard()
        self.random_source = random_source if random_source is not None else SeededRandomSource()

    def read(self, address: int) -> int:
        return self.memory.read(address)

    def write(self, address: int, data: int) -> None:
        self.memory.write(address, data)

    def read_word(self, address: int) -> int:
        return self.memory.read_word(address)
