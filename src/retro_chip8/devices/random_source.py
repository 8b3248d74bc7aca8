# retro_chip8/devices/random_source.py
"""
乱数バイト源。

乱数命令はこのインターフェースを介して乱数を得るため、
テストでは決定的な系列を注入できます。
"""
import random
from abc import ABC, abstractmethod
from typing import Iterable, Optional

# @intent:responsibility 0-255の乱数バイトを供給するインターフェースを定義します。
class RandomSource(ABC):
    @abstractmethod
    def next_byte(self) -> int:
        """次の乱数バイト (0-255) を返します。"""
        pass


# @intent:responsibility random.Randomによる乱数バイト源です。seedを指定すると再現可能になります。
class SeededRandomSource(RandomSource):
    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def next_byte(self) -> int:
        return self._random.randrange(0x100)


# @intent:responsibility 与えられたバイト列を順に返す決定的な乱数バイト源です。
class SequenceRandomSource(RandomSource):
    """
    与えられた値を先頭から順に返し、末尾に達したら先頭へ戻ります。
    """
    def __init__(self, values: Iterable[int]):
        self._values = [v & 0xFF for v in values]
        if not self._values:
            raise ValueError("SequenceRandomSource requires at least one value.")
        self._index = 0

    def next_byte(self) -> int:
        value = self._values[self._index]
        self._index = (self._index + 1) % len(self._values)
        return value
