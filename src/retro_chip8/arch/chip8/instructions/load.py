# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックス、タイマー、メモリ転送）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.font import glyph_address
from .base import make_operation, reg, imm, addr

def _vx(word: int) -> str:
    return reg((word >> 8) & 0xF)

# --- LD Vx, nn (6xnn) ---
def decode_ld_imm(word: int) -> Operation:
    return make_operation(word, "LD", [_vx(word), imm(word & 0xFF)])

def execute_ld_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.x] = op.nn

# --- LD I, nnn (Annn) ---
def decode_ld_i(word: int) -> Operation:
    return make_operation(word, "LD", ["I", addr(word & 0x0FFF)])

def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = op.nnn

# --- LD Vx, DT (Fx07) ---
def decode_ld_vx_dt(word: int) -> Operation:
    return make_operation(word, "LD", [_vx(word), "DT"])

def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.x] = state.delay_timer

# --- LD DT, Vx (Fx15) ---
def decode_ld_dt(word: int) -> Operation:
    return make_operation(word, "LD", ["DT", _vx(word)])

def execute_ld_dt(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.delay_timer = state.v[op.x]

# --- LD ST, Vx (Fx18) ---
def decode_ld_st(word: int) -> Operation:
    return make_operation(word, "LD", ["ST", _vx(word)])

def execute_ld_st(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.sound_timer = state.v[op.x]

# --- ADD I, Vx (Fx1E) ---
def decode_add_i(word: int) -> Operation:
    return make_operation(word, "ADD", ["I", _vx(word)])

# @intent:responsibility IにVxを加算します。16bitで切り詰め、フラグは変更しません。
def execute_add_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# --- LD F, Vx (Fx29) ---
def decode_ld_f(word: int) -> Operation:
    return make_operation(word, "LD", ["F", _vx(word)])

def execute_ld_f(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = glyph_address(state.v[op.x])

# --- LD B, Vx (Fx33) ---
def decode_ld_b(word: int) -> Operation:
    return make_operation(word, "LD", ["B", _vx(word)])

# @intent:responsibility Vxの10進3桁（百、十、一の位）を [I], [I+1], [I+2] に書き込みます。
def execute_ld_b(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    value = state.v[op.x]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
def decode_store_regs(word: int) -> Operation:
    return make_operation(word, "LD", ["[I]", _vx(word)])

# @intent:responsibility V0..Vx を [I]..[I+x] にコピーします。Iは変更しません。
def execute_store_regs(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    for offset in range(op.x + 1):
        bus.write(state.i + offset, state.v[offset])

# --- LD Vx, [I] (Fx65) ---
def decode_load_regs(word: int) -> Operation:
    return make_operation(word, "LD", [_vx(word), "[I]"])

# @intent:responsibility [I]..[I+x] を V0..Vx にコピーします。Iは変更しません。
def execute_load_regs(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    for offset in range(op.x + 1):
        state.v[offset] = bus.read(state.i + offset)
