from dataclasses import dataclass, field
from typing import Dict, Optional

DEFAULT_KEYMAP = {
    "0": 0x0, "1": 0x1, "2": 0x2, "3": 0x3,
    "4": 0x4, "5": 0x5, "6": 0x6, "7": 0x7,
    "8": 0x8, "9": 0x9, "A": 0xA, "B": 0xB,
    "C": 0xC, "D": 0xD, "E": 0xE, "F": 0xF,
}

@dataclass
class CpuConfig:
    cycles_per_frame: int = 10  # 60Hzの1フレームあたりに実行する命令数
    seed: Optional[int] = None  # 乱数命令の再現用シード
    halt_on_error: bool = True  # エラー発生時にエミュレーションを停止するか

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#FFFFFF"
    background: str = "#000000"

@dataclass
class AudioConfig:
    enabled: bool = True
    frequency: float = 604.1
    sample_rate: int = 44100
    volume: float = 0.25

@dataclass
class EmulatorConfig:
    cpu: CpuConfig = field(default_factory=CpuConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))  # Qtのキー名 -> CHIP-8キー
    rom: Optional[str] = None
