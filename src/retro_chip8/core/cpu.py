# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod

from retro_chip8.core.snapshot import Operation
from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import Bus

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:responsibility CPUの状態とバスへの参照を初期化します。
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        # 外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        """
        現在のCPUの状態（レジスタ値など）を返します。
        返されるのは稼働中の状態オブジェクトそのものです。
        """
        return self._state

    # @intent:responsibility メモリから次の命令ワードをフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCから次の命令ワードを読み出して返します。
        PCの更新は `_update_pc` が行うため、ここでは状態を変更してはいけません。
        """
        pass

    # @intent:responsibility フェッチした命令ワードを解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        """
        与えられた命令ワードを解析し、Operationオブジェクトとして返します。
        解析できない場合は例外を送出し、状態は一切変更しません。
        """
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、実行した命令を返します。
    # @intent:rationale Template Methodパターンで共通の実行フロー
    #                  （事前条件→フェッチ→デコード→実行前処理→PC更新→実行）を定義します。
    #                  デコードが失敗した場合、状態変更は一切行われていません。
    def step(self) -> Operation:
        """
        CPUを1命令サイクル進め、実行したOperationを返します。
        """
        # 1. 事前条件 (Hook)
        self._check_can_step()

        # 2. フェッチ
        opcode = self._fetch()

        # 3. デコード
        operation = self._decode(opcode)

        # 4. 実行前処理 (Hook)
        self._before_execute(operation)

        # 5. PC更新 (Hook)
        self._update_pc(operation)

        # 6. 実行
        self._execute(operation)
        return operation

    # @intent:responsibility stepを呼び出してよい状態か検査します。デフォルトは常に可。
    def _check_can_step(self) -> None:
        pass

    # @intent:responsibility デコード成功後、状態を変更する最初の処理です。デフォルトは何もしない。
    def _before_execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 命令実行前にPCを命令長分進めます。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF
