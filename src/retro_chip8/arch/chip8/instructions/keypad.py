# src/retro_chip8/arch/chip8/instructions/keypad.py
"""
入力命令（キー押下判定、キー待ち）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import make_operation, reg, skip_next

# --- SKP Vx (Ex9E) ---
def decode_skp(word: int) -> Operation:
    return make_operation(word, "SKP", [reg((word >> 8) & 0xF)])

def execute_skp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if bus.keyboard.is_pressed(state.v[op.x]):
        skip_next(state)

# --- SKNP Vx (ExA1) ---
def decode_sknp(word: int) -> Operation:
    return make_operation(word, "SKNP", [reg((word >> 8) & 0xF)])

def execute_sknp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if not bus.keyboard.is_pressed(state.v[op.x]):
        skip_next(state)

# --- LD Vx, K (Fx0A) ---
def decode_wait_key(word: int) -> Operation:
    return make_operation(word, "LD", [reg((word >> 8) & 0xF), "K"])

# @intent:responsibility キー待ち状態へ遷移し、格納先レジスタを記憶します。
# @intent:post-condition PCはこの命令自身を指し、deliver_keyで次の命令へ進みます。
def execute_wait_key(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.awaiting_key = True
    state.key_register = op.x
    state.pc = (state.pc - op.length) & 0xFFFF
