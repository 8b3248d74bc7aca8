# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令パターンと命令実装のマッピング定義。

キーは `instruction_key` が命令ワードから可変フィールドを取り除いた値です。
"""
from . import control
from . import alu
from . import load
from . import graphics
from . import keypad

# @intent:map 命令パターンからデコード関数へのマッピングテーブル。
DECODE_MAP = {
    # Control
    0x00EE: control.decode_ret,
    0x1000: control.decode_jp,
    0x2000: control.decode_call,
    0x3000: control.decode_se_imm,
    0x4000: control.decode_sne_imm,
    0x5000: control.decode_se_reg,
    0x9000: control.decode_sne_reg,
    0xB000: control.decode_jp_v0,

    # ALU
    0x7000: alu.decode_add_imm,
    0x8000: alu.decode_ld_reg,
    0x8001: alu.decode_or,
    0x8002: alu.decode_and,
    0x8003: alu.decode_xor,
    0x8004: alu.decode_add_reg,
    0x8005: alu.decode_sub,
    0x8006: alu.decode_shr,
    0x8007: alu.decode_subn,
    0x800E: alu.decode_shl,
    0xC000: alu.decode_rnd,

    # Load/Store
    0x6000: load.decode_ld_imm,
    0xA000: load.decode_ld_i,
    0xF007: load.decode_ld_vx_dt,
    0xF015: load.decode_ld_dt,
    0xF018: load.decode_ld_st,
    0xF01E: load.decode_add_i,
    0xF029: load.decode_ld_f,
    0xF033: load.decode_ld_b,
    0xF055: load.decode_store_regs,
    0xF065: load.decode_load_regs,

    # Graphics
    0x00E0: graphics.decode_cls,
    0xD000: graphics.decode_drw,

    # Keypad
    0xE09E: keypad.decode_skp,
    0xE0A1: keypad.decode_sknp,
    0xF00A: keypad.decode_wait_key,
}

# @intent:map 命令パターンから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    0x00EE: control.execute_ret,
    0x1000: control.execute_jp,
    0x2000: control.execute_call,
    0x3000: control.execute_se_imm,
    0x4000: control.execute_sne_imm,
    0x5000: control.execute_se_reg,
    0x9000: control.execute_sne_reg,
    0xB000: control.execute_jp_v0,

    # ALU
    0x7000: alu.execute_add_imm,
    0x8000: alu.execute_ld_reg,
    0x8001: alu.execute_or,
    0x8002: alu.execute_and,
    0x8003: alu.execute_xor,
    0x8004: alu.execute_add_reg,
    0x8005: alu.execute_sub,
    0x8006: alu.execute_shr,
    0x8007: alu.execute_subn,
    0x800E: alu.execute_shl,
    0xC000: alu.execute_rnd,

    # Load/Store
    0x6000: load.execute_ld_imm,
    0xA000: load.execute_ld_i,
    0xF007: load.execute_ld_vx_dt,
    0xF015: load.execute_ld_dt,
    0xF018: load.execute_ld_st,
    0xF01E: load.execute_add_i,
    0xF029: load.execute_ld_f,
    0xF033: load.execute_ld_b,
    0xF055: load.execute_store_regs,
    0xF065: load.execute_load_regs,

    # Graphics
    0x00E0: graphics.execute_cls,
    0xD000: graphics.execute_drw,

    # Keypad
    0xE09E: keypad.execute_skp,
    0xE0A1: keypad.execute_sknp,
    0xF00A: keypad.execute_wait_key,
}

# @intent:map 状態を変更する前に検査すべき事前条件を持つ命令のマッピングテーブル。
PRECONDITION_MAP = {
    0x00EE: control.check_ret,
}
