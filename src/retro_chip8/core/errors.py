# retro_chip8/core/errors.py
"""
Core Layer (例外定義)

インタプリタコアが送出する例外を定義します。
いずれもプログラム内容またはホスト側の呼び出し順序の誤りを表し、
再試行によって回復する一時的な失敗ではありません。
"""
from typing import Optional


# @intent:responsibility コアが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    """インタプリタコアの例外の基底クラス。"""


# @intent:responsibility デコードできない命令ワードを検出したことを表します。
class UnsupportedOpcodeError(Chip8Error):
    """
    命令表に存在しない16bit命令ワードをフェッチした場合に送出されます。
    `word` 属性に問題の命令ワードを保持します。
    """
    def __init__(self, word: int, address: Optional[int] = None):
        self.word = word & 0xFFFF
        self.address = address
        message = f"Unsupported opcode {self.word:04X}"
        if address is not None:
            message += f" at ${address:03X}"
        super().__init__(message)


# @intent:responsibility 呼び出し規約の違反（キー待ち中のstep、空スタックからのreturnなど）を表します。
class PreconditionViolationError(Chip8Error, RuntimeError):
    """
    コアの事前条件が満たされていない状態で操作が呼び出されたことを表します。
    """


# @intent:responsibility プログラム領域 (0x200-0xFFF) に収まらないプログラムのロードを表します。
class ProgramTooLargeError(Chip8Error, ValueError):
    """
    ロードしようとしたプログラムがメモリのプログラム領域より大きい場合に送出されます。
    """
    def __init__(self, length: int, capacity: int):
        self.length = length
        self.capacity = capacity
        super().__init__(f"Program of {length} bytes exceeds the {capacity} byte program area.")
