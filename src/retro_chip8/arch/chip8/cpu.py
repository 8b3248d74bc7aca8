# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 インタプリタコアの中心モジュール。

状態遷移は Running と AwaitingKey の2状態です。
Running では `step()` が1命令を実行し、キー待ち命令によって AwaitingKey へ遷移します。
AwaitingKey では `deliver_key()` だけが有効で、キーを格納して Running へ戻ります。
"""
import logging
from typing import Iterable, Optional, Union

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import PreconditionViolationError, ProgramTooLargeError
from retro_chip8.core.snapshot import FrameSnapshot, Operation
from retro_chip8.transport.bus import Bus, MEMORY_SIZE
from retro_chip8.devices.display import Display
from retro_chip8.devices.keyboard import Keyboard, KEY_COUNT
from retro_chip8.devices.timers import TimerClock
from retro_chip8.arch.chip8.state import Chip8CpuState, PROGRAM_START
from retro_chip8.arch.chip8.font import FONT_ADDRESS, FONT_SET
from retro_chip8.arch.chip8.instructions import check_preconditions, decode_opcode, execute_instruction

logger = logging.getLogger(__name__)

PROGRAM_CAPACITY = MEMORY_SIZE - PROGRAM_START

ProgramBytes = Union[bytes, bytearray, Iterable[int]]

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー、キー待ち）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 をエミュレートするクラス。

    タイマーは `step()` の中で60Hzの刻みが到来するたびに、遅延タイマーとサウンドタイマーの
    両方が1ずつ減算されます。`auto_tick_timers=False` の場合、ホストが `tick_timers()` を
    自身のフレーム周期で呼び出します。
    """
    # @intent:responsibility CPUを初期化し、空のプログラムがロードされた状態にします。
    def __init__(self, bus: Optional[Bus] = None, timer_clock: Optional[TimerClock] = None,
                 auto_tick_timers: bool = True):
        self._timer_clock = timer_clock if timer_clock is not None else TimerClock()
        self._auto_tick_timers = auto_tick_timers
        self._program = b""
        super().__init__(bus if bus is not None else Bus())
        self._install(self._program)

    # @intent:responsibility CHIP-8の初期状態を生成します。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 新しいプログラムをロードし、全ての状態を初期化します。
    # @intent:pre-condition プログラムは 0x200-0xFFF の3584バイトに収まる必要があります。
    def load(self, program: ProgramBytes) -> None:
        """
        メモリを0で埋め、フォントを再配置し、プログラムを0x200から書き込みます。
        レジスタ、I、スタック、タイマー、表示、キー待ち状態を初期化し、PCを0x200にします。
        キーボードの状態はホストが所有するため変更しません。
        """
        data = bytes(program)
        if len(data) > PROGRAM_CAPACITY:
            raise ProgramTooLargeError(len(data), PROGRAM_CAPACITY)
        self._program = data
        self._install(data)
        logger.debug("Loaded program of %d bytes at $%03X", len(data), PROGRAM_START)

    def _install(self, data: bytes) -> None:
        memory = self._bus.memory
        memory.clear()
        memory.load_data(FONT_ADDRESS, FONT_SET)
        memory.load_data(PROGRAM_START, data)
        self._bus.display.clear()
        self._state = self._create_initial_state()
        self._timer_clock.restart()

    # @intent:responsibility 最後にロードしたプログラムで再度初期化します。
    def reset(self) -> None:
        self.load(self._program)

    # @intent:responsibility キー待ち中はstepを許可しません。
    def _check_can_step(self) -> None:
        if self._state.awaiting_key:
            raise PreconditionViolationError("step() called while awaiting a key press.")

    # @intent:responsibility 現在のPCからビッグエンディアンの16bit命令ワードをフェッチします。
    def _fetch(self) -> int:
        return self._bus.read_word(self._state.pc)

    # @intent:responsibility 命令ワードをデコードし、Operationオブジェクトを返します。
    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    # @intent:responsibility 命令の事前条件を検査し、60Hzの刻みが到来していればタイマーを減算します。
    # @intent:rationale 事前条件違反はタイマーやPCを変更する前に検出します。
    def _before_execute(self, operation: Operation) -> None:
        check_preconditions(operation, self._state)
        if self._auto_tick_timers and self._timer_clock.poll():
            self.tick_timers()

    # @intent:responsibility Operationを実行し、状態を更新します。
    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus)
        if self._state.awaiting_key:
            logger.debug("Awaiting key for V%X at $%03X", self._state.key_register, self._state.pc)

    # @intent:responsibility 遅延タイマーとサウンドタイマーをそれぞれ0を下回らない範囲で1減算します。
    def tick_timers(self) -> None:
        s = self._state
        if s.delay_timer > 0:
            s.delay_timer -= 1
        if s.sound_timer > 0:
            s.sound_timer -= 1

    # @intent:responsibility キー待ち状態を解除し、押されたキーを格納先レジスタへ書き込みます。
    # @intent:pre-condition キー待ち状態であり、keyは0-15である必要があります。
    def deliver_key(self, key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is out of range 0-{KEY_COUNT - 1}.")
        s = self._state
        if not s.awaiting_key:
            raise PreconditionViolationError("deliver_key() called while not awaiting a key press.")
        s.v[s.key_register] = key
        s.pc = (s.pc + 2) & 0xFFFF
        s.awaiting_key = False
        logger.debug("Key %X delivered to V%X", key, s.key_register)
        s.key_register = None

    def is_awaiting_key(self) -> bool:
        return self._state.awaiting_key

    # @intent:responsibility レンダラへ渡すための表示内容のコピーを返します。
    def frame_snapshot(self) -> FrameSnapshot:
        display = self._bus.display
        return FrameSnapshot(
            width=display.width,
            height=display.height,
            pixels=display.copy(),
        )

    @property
    def program(self) -> bytes:
        return self._program

    @property
    def bus(self) -> Bus:
        return self._bus

    @property
    def display(self) -> Display:
        return self._bus.display

    @property
    def keyboard(self) -> Keyboard:
        return self._bus.keyboard

    @property
    def delay_timer(self) -> int:
        return self._state.delay_timer

    @property
    def sound_timer(self) -> int:
        return self._state.sound_timer

    @property
    def keyboard_mask(self) -> int:
        return self._bus.keyboard.mask

    @keyboard_mask.setter
    def keyboard_mask(self, value: int) -> None:
        self._bus.keyboard.mask = value
