# src/retro_chip8/arch/chip8/instructions/graphics.py
"""
表示命令（画面消去、スプライト描画）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import make_operation, reg

# --- CLS (00E0) ---
def decode_cls(word: int) -> Operation:
    return make_operation(word, "CLS")

def execute_cls(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    bus.display.clear()

# --- DRW Vx, Vy, n (Dxyn) ---
def decode_drw(word: int) -> Operation:
    return make_operation(word, "DRW", [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF), str(word & 0xF)])

# @intent:responsibility [I, I+n) のnバイトのスプライトを (Vx, Vy) にXOR合成し、衝突の有無をVFに設定します。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = state.v[op.x]
    y = state.v[op.y]
    rows = [bus.read(state.i + row) for row in range(op.n)]
    collision = bus.display.draw_sprite(x, y, rows)
    state.vf = 1 if collision else 0
