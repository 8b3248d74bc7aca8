# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from retro_chip8.core.errors import UnsupportedOpcodeError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .maps import DECODE_MAP, EXECUTE_MAP, PRECONDITION_MAP

# @intent:responsibility 命令ワードから、オペランドを除いた命令パターン（マップのキー）を求めます。
def instruction_key(word: int) -> int:
    family = word & 0xF000
    if family == 0x0000:
        return word
    if family == 0x8000:
        return word & 0xF00F
    if family in (0xE000, 0xF000):
        return word & 0xF0FF
    return family

# @intent:responsibility CHIP-8の命令ワードをデコードします。
# @intent:post-condition 命令表にないワードは UnsupportedOpcodeError を送出します。
def decode_opcode(word: int, pc: Optional[int] = None) -> Operation:
    """
    16bit命令ワードをデコードし、Operationオブジェクトを返します。
    """
    decoder = DECODE_MAP.get(instruction_key(word))
    if decoder is None:
        raise UnsupportedOpcodeError(word, pc)
    return decoder(word)

# @intent:responsibility 命令の事前条件を検査します。違反時は状態を変更せずに例外を送出します。
def check_preconditions(operation: Operation, state: Chip8CpuState) -> None:
    checker = PRECONDITION_MAP.get(instruction_key(operation.opcode))
    if checker is not None:
        checker(state, operation)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus) -> None:
    """
    デコードされた命令を実行し、CPUの状態とバス上のデバイスを変更します。
    """
    executor = EXECUTE_MAP.get(instruction_key(operation.opcode))
    if executor is None:
        raise UnsupportedOpcodeError(operation.opcode)
    check_preconditions(operation, state)
    executor(state, bus, operation)
