# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from retro_chip8.core.errors import PreconditionViolationError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import make_operation, reg, imm, addr, skip_next

# --- RET (00EE) ---
def decode_ret(word: int) -> Operation:
    return make_operation(word, "RET")

# @intent:responsibility 空のコールスタックでのRETを、状態を変更する前に検出します。
# @intent:pre-condition 対応するCALLが実行済みであること。空スタックは事前条件違反です。
def check_ret(state: Chip8CpuState, op: Operation) -> None:
    if not state.stack:
        raise PreconditionViolationError(f"RET with an empty call stack at ${state.pc:03X}")

# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
def execute_ret(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = state.stack.pop()

# --- JP nnn (1nnn) ---
def decode_jp(word: int) -> Operation:
    return make_operation(word, "JP", [addr(word & 0x0FFF)])

def execute_jp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = op.nnn

# --- CALL nnn (2nnn) ---
def decode_call(word: int) -> Operation:
    return make_operation(word, "CALL", [addr(word & 0x0FFF)])

# @intent:responsibility 戻りアドレス（CALLの次の命令）をプッシュしてからジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    # state.pcはCPU.stepで既に次の命令を指している
    state.stack.append(state.pc)
    state.pc = op.nnn

# --- SE Vx, nn (3xnn) ---
def decode_se_imm(word: int) -> Operation:
    return make_operation(word, "SE", [reg((word >> 8) & 0xF), imm(word & 0xFF)])

def execute_se_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if state.v[op.x] == op.nn:
        skip_next(state)

# --- SNE Vx, nn (4xnn) ---
def decode_sne_imm(word: int) -> Operation:
    return make_operation(word, "SNE", [reg((word >> 8) & 0xF), imm(word & 0xFF)])

def execute_sne_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if state.v[op.x] != op.nn:
        skip_next(state)

# --- SE Vx, Vy (5xyN, 下位ニブルは無視) ---
def decode_se_reg(word: int) -> Operation:
    return make_operation(word, "SE", [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)])

def execute_se_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# --- SNE Vx, Vy (9xyN, 下位ニブルは無視) ---
def decode_sne_reg(word: int) -> Operation:
    return make_operation(word, "SNE", [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)])

def execute_sne_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- JP V0, nnn (Bnnn) ---
def decode_jp_v0(word: int) -> Operation:
    return make_operation(word, "JP", ["V0", addr(word & 0x0FFF)])

# @intent:responsibility V0をオフセットとして加算した先へジャンプします (最大 0x10FE)。
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = (op.nnn + state.v[0]) & 0xFFFF
