# retro_chip8/core/snapshot.py
"""
不変データ構造

デコード済み命令 (Operation) と、レンダラへ受け渡すフレーム (FrameSnapshot) を定義します。
どちらも生成後に変更されないため、スレッド境界をまたいで受け渡すことができます。
"""
from dataclasses import dataclass, field
from typing import List, Tuple


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    デコードされた命令の詳細（HEX、ニーモニック、オペランド、各ビットフィールド）を記録するデータクラス。
    """
    opcode_hex: str  # 例: "6A05"
    mnemonic: str  # 例: "LD"
    operands: List[str] = field(default_factory=list)  # 例: ["VA", "#$05"]
    x: int = 0  # 第2ニブル (レジスタ番号)
    y: int = 0  # 第3ニブル (レジスタ番号)
    n: int = 0  # 下位4bit
    nn: int = 0  # 下位8bit
    nnn: int = 0  # 下位12bit (アドレス)
    length: int = 2  # 命令のバイト長 (常に2)

    @property
    def opcode(self) -> int:
        return int(self.opcode_hex, 16)

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic


# @intent:responsibility ある時点の表示内容のコピーを不変に保持します。
# @intent:rationale レンダラは稼働中のフレームバッファを直接参照せず、このコピーだけを読みます。
@dataclass(frozen=True)
class FrameSnapshot:
    """
    64x32ピクセルの表示内容を記録した不変のデータ構造。
    `pixels` は `x + y * width` でインデックスされ、点灯ピクセルは 0xFFFFFFFF、消灯は 0 です。
    """
    width: int
    height: int
    pixels: Tuple[int, ...]

    def pixel(self, x: int, y: int) -> bool:
        return self.pixels[x + y * self.width] != 0

    def rows(self) -> List[str]:
        """テストやログ出力用に、各行を '#' と '.' の文字列として返します。"""
        return [
            "".join("#" if self.pixels[x + y * self.width] else "." for x in range(self.width))
            for y in range(self.height)
        ]
