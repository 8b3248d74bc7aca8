# tests/arch/chip8/test_chip8_cpu.py
"""
Chip8Cpu（ロード、命令サイクル、キー待ち状態遷移、タイマー）の検証。
"""
import pytest

from retro_chip8.core.errors import (
    Chip8Error, PreconditionViolationError, ProgramTooLargeError, UnsupportedOpcodeError,
)
from retro_chip8.transport.bus import Bus
from retro_chip8.devices.random_source import SequenceRandomSource
from retro_chip8.devices.timers import TimerClock, TIMER_INTERVAL
from retro_chip8.arch.chip8 import Chip8Cpu, Chip8CpuState
from retro_chip8.arch.chip8.cpu import PROGRAM_CAPACITY
from retro_chip8.arch.chip8.font import FONT_SET

# @intent:test_suite インタプリタコアの公開操作を検証します。


def words(*values):
    data = bytearray()
    for value in values:
        data += bytes([value >> 8, value & 0xFF])
    return bytes(data)


@pytest.fixture
def make_cpu(fake_clock):
    def factory(program=b"", random_values=(0,), auto_tick_timers=True):
        bus = Bus(random_source=SequenceRandomSource(random_values))
        cpu = Chip8Cpu(bus, TimerClock(fake_clock), auto_tick_timers=auto_tick_timers)
        cpu.load(program)
        return cpu
    return factory


class TestLoad:
    def test_pc_and_program_placement(self, make_cpu):
        program = bytes([0x60, 0x05, 0x70, 0x03, 0xAB])
        cpu = make_cpu(program)
        state = cpu.get_state()
        assert isinstance(state, Chip8CpuState)
        assert state.pc == 512
        assert cpu.bus.memory.dump(512, len(program)) == program
        assert all(cpu.bus.read(addr) == 0 for addr in range(512 + len(program), 4096))
        assert cpu.program == program

    def test_font_installed(self, make_cpu):
        cpu = make_cpu(b"")
        assert len(FONT_SET) == 80
        assert cpu.bus.memory.dump(0, 80) == FONT_SET
        assert all(cpu.bus.read(addr) == 0 for addr in range(80, 512))

    def test_accepts_int_sequences(self, make_cpu):
        cpu = make_cpu([0x00, 0xE0])
        assert cpu.bus.read_word(0x200) == 0x00E0

    def test_program_too_large(self, make_cpu):
        cpu = make_cpu(b"")
        with pytest.raises(ProgramTooLargeError) as excinfo:
            cpu.load(bytes(PROGRAM_CAPACITY + 1))
        assert isinstance(excinfo.value, ValueError)
        assert isinstance(excinfo.value, Chip8Error)

    def test_program_filling_memory(self, make_cpu):
        program = bytes([0x12]) * PROGRAM_CAPACITY
        cpu = make_cpu(program)
        assert cpu.bus.read(0xFFF) == 0x12

    def test_load_resets_everything_but_keyboard(self, make_cpu):
        cpu = make_cpu(words(0x2204, 0x0000, 0xD005))
        cpu.keyboard_mask = 0x0003
        state = cpu.get_state()
        state.v[3] = 9
        state.delay_timer = 5
        state.sound_timer = 6
        cpu.step()  # CALL $204
        cpu.step()  # DRW V0, V0, 5 (フォント '0')
        state.i = 0x123
        cpu.bus.write(0x900, 0x55)
        assert state.stack
        assert any(cpu.display[i] for i in range(len(cpu.display)))

        cpu.load(words(0x00E0))
        new_state = cpu.get_state()
        assert new_state.pc == 0x200
        assert new_state.v == [0] * 16
        assert new_state.i == 0
        assert new_state.stack == []
        assert cpu.delay_timer == 0
        assert cpu.sound_timer == 0
        assert not cpu.is_awaiting_key()
        assert cpu.bus.read(0x900) == 0
        assert not any(cpu.display[i] for i in range(len(cpu.display)))
        assert cpu.keyboard_mask == 0x0003

    def test_reset_reloads_last_program(self, make_cpu):
        cpu = make_cpu(words(0x6042))
        cpu.step()
        assert cpu.get_state().v[0] == 0x42
        cpu.reset()
        assert cpu.get_state().pc == 0x200
        assert cpu.get_state().v[0] == 0
        assert cpu.bus.read_word(0x200) == 0x6042


class TestStep:
    def test_end_to_end_program(self, make_cpu):
        cpu = make_cpu(words(0x6005, 0x7003, 0xF015))
        for _ in range(3):
            cpu.step()
        assert cpu.delay_timer == 8
        assert cpu.get_state().v[0] == 8
        assert cpu.get_state().pc == 0x206

    def test_step_returns_operation(self, make_cpu):
        cpu = make_cpu(words(0xA123))
        op = cpu.step()
        assert op.mnemonic == "LD"
        assert op.operands == ["I", "$123"]
        assert op.nnn == 0x123

    def test_unsupported_opcode_leaves_state_unchanged(self, make_cpu, fake_clock):
        cpu = make_cpu(words(0x6A07, 0xFFFF))
        cpu.step()
        state = cpu.get_state()
        state.delay_timer = 10
        state.sound_timer = 10
        state.stack.append(0x300)
        cpu.display.draw_sprite(0, 0, [0xAA])
        before_state = (state.pc, list(state.v), state.i, list(state.stack),
                        state.delay_timer, state.sound_timer, state.awaiting_key)
        before_memory = cpu.bus.memory.dump(0, 4096)
        before_display = cpu.display.copy()

        fake_clock.advance(TIMER_INTERVAL * 2)
        with pytest.raises(UnsupportedOpcodeError) as excinfo:
            cpu.step()

        assert excinfo.value.word == 0xFFFF
        assert "FFFF" in str(excinfo.value)
        after_state = (state.pc, list(state.v), state.i, list(state.stack),
                       state.delay_timer, state.sound_timer, state.awaiting_key)
        assert after_state == before_state
        assert cpu.bus.memory.dump(0, 4096) == before_memory
        assert cpu.display.copy() == before_display

    def test_empty_memory_is_unsupported(self, make_cpu):
        cpu = make_cpu(b"")
        with pytest.raises(UnsupportedOpcodeError) as excinfo:
            cpu.step()
        assert excinfo.value.word == 0x0000
        assert excinfo.value.address == 0x200

    def test_call_then_return(self, make_cpu):
        cpu = make_cpu(words(0x2206, 0x6001, 0x0000, 0x00EE))
        cpu.step()
        assert cpu.get_state().pc == 0x206
        assert cpu.get_state().stack == [0x202]
        cpu.step()
        assert cpu.get_state().pc == 0x202
        assert cpu.get_state().stack == []
        cpu.step()
        assert cpu.get_state().v[0] == 1

    def test_return_with_empty_stack(self, make_cpu, fake_clock):
        cpu = make_cpu(words(0x00EE))
        state = cpu.get_state()
        state.delay_timer = 10
        state.sound_timer = 10
        fake_clock.advance(TIMER_INTERVAL * 2)
        with pytest.raises(PreconditionViolationError):
            cpu.step()
        assert state.pc == 0x200
        assert (state.delay_timer, state.sound_timer) == (10, 10)

    def test_skip_register_with_nonzero_low_nibble(self, make_cpu):
        cpu = make_cpu(words(0x5121, 0x6001, 0x9127, 0x6002))
        cpu.step()
        assert cpu.get_state().pc == 0x204
        cpu.step()
        assert cpu.get_state().pc == 0x206
        cpu.step()
        assert cpu.get_state().v[0] == 2

    def test_random_uses_injected_source(self, make_cpu):
        cpu = make_cpu(words(0xC0FF, 0xC10F), random_values=(0xA5, 0x3C))
        cpu.step()
        cpu.step()
        assert cpu.get_state().v[0] == 0xA5
        assert cpu.get_state().v[1] == 0x0C


class TestKeyWait:
    def test_wait_key_round_trip(self, make_cpu):
        cpu = make_cpu(words(0xF30A, 0x6101))
        cpu.step()
        state = cpu.get_state()
        assert state.pc == 0x200
        assert cpu.is_awaiting_key()
        assert state.key_register == 3

        cpu.deliver_key(0xB)
        assert state.v[3] == 0xB
        assert state.pc == 0x202
        assert not cpu.is_awaiting_key()

        cpu.step()
        assert state.v[1] == 1

    def test_step_while_awaiting_fails(self, make_cpu):
        cpu = make_cpu(words(0xF00A))
        cpu.step()
        with pytest.raises(PreconditionViolationError):
            cpu.step()
        assert cpu.is_awaiting_key()
        assert cpu.get_state().pc == 0x200

    def test_deliver_key_when_running_fails(self, make_cpu):
        cpu = make_cpu(words(0x6001))
        with pytest.raises(PreconditionViolationError):
            cpu.deliver_key(1)

    def test_deliver_key_out_of_range(self, make_cpu):
        cpu = make_cpu(words(0xF00A))
        cpu.step()
        with pytest.raises(ValueError):
            cpu.deliver_key(16)
        assert cpu.is_awaiting_key()

    def test_wait_key_into_vf(self, make_cpu):
        cpu = make_cpu(words(0xFF0A))
        cpu.step()
        cpu.deliver_key(4)
        assert cpu.get_state().vf == 4


class TestTimers:
    def test_both_timers_tick_at_60hz(self, make_cpu, fake_clock):
        cpu = make_cpu(words(0x6003, 0xF015, 0xF018, 0x1206))
        for _ in range(3):
            cpu.step()
        assert (cpu.delay_timer, cpu.sound_timer) == (3, 3)

        cpu.step()
        assert (cpu.delay_timer, cpu.sound_timer) == (3, 3)

        fake_clock.advance(TIMER_INTERVAL)
        cpu.step()
        assert (cpu.delay_timer, cpu.sound_timer) == (2, 2)

        # 1回のstepでは高々1回だけ減算される
        fake_clock.advance(TIMER_INTERVAL * 10)
        cpu.step()
        assert (cpu.delay_timer, cpu.sound_timer) == (1, 1)

    def test_timers_never_go_below_zero(self, make_cpu):
        cpu = make_cpu(b"")
        state = cpu.get_state()
        state.delay_timer = 1
        cpu.tick_timers()
        cpu.tick_timers()
        assert cpu.delay_timer == 0
        assert cpu.sound_timer == 0

    def test_read_delay_timer(self, make_cpu):
        cpu = make_cpu(words(0xF507))
        cpu.get_state().delay_timer = 0x2A
        cpu.step()
        assert cpu.get_state().v[5] == 0x2A

    def test_manual_timer_mode(self, make_cpu, fake_clock):
        cpu = make_cpu(words(0x1200), auto_tick_timers=False)
        cpu.get_state().delay_timer = 2
        fake_clock.advance(TIMER_INTERVAL * 3)
        cpu.step()
        assert cpu.delay_timer == 2
        cpu.tick_timers()
        assert cpu.delay_timer == 1


class TestHostInterface:
    def test_keyboard_mask(self, make_cpu):
        cpu = make_cpu(b"")
        cpu.keyboard_mask = 0x0010
        assert cpu.keyboard.is_pressed(4)
        assert cpu.keyboard_mask == 0x0010

    def test_frame_snapshot(self, make_cpu):
        cpu = make_cpu(words(0xA000, 0xD015))
        cpu.step()
        cpu.step()
        frame = cpu.frame_snapshot()
        assert (frame.width, frame.height) == (64, 32)
        assert frame.rows()[0].startswith("####....")
        assert frame.rows()[1].startswith("#..#....")
        # スナップショットは以後の描画の影響を受けない
        cpu.display.clear()
        assert frame.pixel(0, 0)
