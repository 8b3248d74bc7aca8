# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState

PROGRAM_START = 0x200
REGISTER_COUNT = 16
VF = 0xF

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC）、コールスタック、タイマー、キー待ち状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8のレジスタ状態を保持するデータクラス。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)  # V0-VF
    i: int = 0x0000  # Index Register
    stack: List[int] = field(default_factory=list)  # 戻りアドレス (LIFO)
    delay_timer: int = 0
    sound_timer: int = 0
    awaiting_key: bool = False
    key_register: Optional[int] = None  # キー待ち命令の格納先レジスタ番号

    # @intent:accessor VFレジスタ（キャリー/ボロー/衝突フラグ）へのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[VF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[VF] = value & 0xFF
