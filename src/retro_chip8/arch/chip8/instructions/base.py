# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from typing import List, Optional

from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState

# @intent:utility_function 命令ワードの各ビットフィールドを埋めたOperationを生成します。
def make_operation(word: int, mnemonic: str, operands: Optional[List[str]] = None) -> Operation:
    return Operation(
        opcode_hex=f"{word:04X}",
        mnemonic=mnemonic,
        operands=operands or [],
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        nn=word & 0x00FF,
        nnn=word & 0x0FFF,
    )

def reg(index: int) -> str:
    return f"V{index:X}"

def imm(value: int) -> str:
    return f"#${value:02X}"

def addr(value: int) -> str:
    return f"${value:03X}"

# @intent:utility_function 次の命令を読み飛ばします（基本の+2に加えてさらに+2）。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF
