# retro_chip8/devices/keyboard.py
"""
16キーの入力面。

ホストの入力処理が書き込み、コアが読み出す唯一の共有状態であるため、
ビットマスクの更新はロックで保護します。
"""
import threading

KEY_COUNT = 16

# @intent:responsibility キー0-15の押下状態を16bitのビットマスクとして保持します。
class Keyboard:
    def __init__(self):
        self._mask = 0
        self._lock = threading.Lock()

    @property
    def mask(self) -> int:
        with self._lock:
            return self._mask

    @mask.setter
    def mask(self, value: int) -> None:
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"Keyboard mask {value} is not a 16-bit value.")
        with self._lock:
            self._mask = value

    # @intent:responsibility キーの押下をビットマスクに反映します。
    def press(self, key: int) -> None:
        _check_key(key)
        with self._lock:
            self._mask |= 1 << key

    # @intent:responsibility キーの解放をビットマスクに反映します。
    def release(self, key: int) -> None:
        _check_key(key)
        with self._lock:
            self._mask &= ~(1 << key) & 0xFFFF

    # @intent:responsibility キーが押下されているかを返します。
    # @intent:rationale 命令はレジスタ値をそのままキー番号として使うため、16以上の値は押下されていない扱いです。
    def is_pressed(self, key: int) -> bool:
        if not 0 <= key < KEY_COUNT:
            return False
        return bool((self.mask >> key) & 0x01)


def _check_key(key: int) -> None:
    if not 0 <= key < KEY_COUNT:
        raise ValueError(f"Key {key} is out of range 0-{KEY_COUNT - 1}.")
