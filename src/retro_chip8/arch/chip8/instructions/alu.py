# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFを設定する命令は、オペランドを読み出してから VF を書き、最後に Vx へ結果を書き込みます。
そのため x が F の場合は演算結果が VF に残ります。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import make_operation, reg, imm

# --- ADD Vx, nn (7xnn) ---
def decode_add_imm(word: int) -> Operation:
    return make_operation(word, "ADD", [reg((word >> 8) & 0xF), imm(word & 0xFF)])

# @intent:responsibility 即値を加算します。キャリーフラグは変更しません。
def execute_add_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.x] = (state.v[op.x] + op.nn) & 0xFF

# --- 8xy_ 系 ---
def _decode_xy(mnemonic: str):
    def decoder(word: int) -> Operation:
        return make_operation(word, mnemonic, [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)])
    return decoder

decode_ld_reg = _decode_xy("LD")
decode_or = _decode_xy("OR")
decode_and = _decode_xy("AND")
decode_xor = _decode_xy("XOR")
decode_add_reg = _decode_xy("ADD")
decode_sub = _decode_xy("SUB")
decode_subn = _decode_xy("SUBN")

def decode_shr(word: int) -> Operation:
    return make_operation(word, "SHR", [reg((word >> 8) & 0xF)])

def decode_shl(word: int) -> Operation:
    return make_operation(word, "SHL", [reg((word >> 8) & 0xF)])

def execute_ld_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.x] = state.v[op.y]

def execute_or(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.x] = state.v[op.x] | state.v[op.y]

def execute_and(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.x] = state.v[op.x] & state.v[op.y]

def execute_xor(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.x] = state.v[op.x] ^ state.v[op.y]

# @intent:responsibility Vx + Vy。結果が255を超えた場合 VF=1。
def execute_add_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.vf = 1 if res > 0xFF else 0
    state.v[op.x] = res & 0xFF

# @intent:responsibility Vx - Vy。Vx >= Vy (ボローなし) の場合 VF=1。
def execute_sub(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    v1, v2 = state.v[op.x], state.v[op.y]
    state.vf = 1 if v1 >= v2 else 0
    state.v[op.x] = (v1 - v2) & 0xFF

# @intent:responsibility Vy - Vx。Vy >= Vx (ボローなし) の場合 VF=1。
def execute_subn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    v1, v2 = state.v[op.x], state.v[op.y]
    state.vf = 1 if v2 >= v1 else 0
    state.v[op.x] = (v2 - v1) & 0xFF

# @intent:responsibility Vxを1bit右シフトし、押し出された最下位ビットをVFに設定します。
def execute_shr(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    v1 = state.v[op.x]
    state.vf = v1 & 0x01
    state.v[op.x] = v1 >> 1

# @intent:responsibility Vxを1bit左シフトし、押し出された最上位ビットをVFに設定します。
def execute_shl(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    v1 = state.v[op.x]
    state.vf = (v1 >> 7) & 0x01
    state.v[op.x] = (v1 << 1) & 0xFF

# --- RND Vx, nn (Cxnn) ---
def decode_rnd(word: int) -> Operation:
    return make_operation(word, "RND", [reg((word >> 8) & 0xF), imm(word & 0xFF)])

# @intent:responsibility バスの乱数源から得たバイトを即値でマスクしてVxに格納します。
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.x] = bus.random_source.next_byte() & op.nn
