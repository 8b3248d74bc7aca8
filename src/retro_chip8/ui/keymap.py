# src/retro_chip8/ui/keymap.py
"""
Qtのキーコードと CHIP-8 の16キーの対応表。
"""
from typing import Dict, Mapping, Optional

from PySide6.QtCore import Qt

# @intent:utility_function キー名（"A", "Space", "1" など）をQtのキーコードへ変換します。
def resolve_key_name(name: str) -> int:
    for candidate in (name, name.upper(), name.capitalize()):
        key = getattr(Qt.Key, f"Key_{candidate}", None)
        if key is not None:
            return key.value if hasattr(key, "value") else int(key)
    raise ValueError(f"Unknown key name: {name!r}")

# @intent:responsibility Qtのキーイベントを CHIP-8 のキー番号へ変換します。
class KeyMapper:
    def __init__(self, mapping: Mapping[str, int]):
        self._codes: Dict[int, int] = {}
        for name, chip8_key in mapping.items():
            if not 0 <= chip8_key <= 0xF:
                raise ValueError(f"CHIP-8 key for {name!r} must be between 0 and 15: {chip8_key}")
            self._codes[resolve_key_name(name)] = chip8_key

    def lookup(self, qt_key: int) -> Optional[int]:
        return self._codes.get(qt_key)
