# tests/loader/test_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
"""
import pytest

from retro_chip8.core.errors import ProgramTooLargeError
from retro_chip8.arch.chip8.cpu import Chip8Cpu, PROGRAM_CAPACITY
from retro_chip8.loader.loader import RomLoader

# @intent:test_suite ROMファイルのロード機能の検証。

class TestRomLoader:
    @pytest.fixture
    def setup_loader(self, tmp_path):
        return RomLoader(), tmp_path

    def test_load_rom_bytes(self, setup_loader):
        loader, tmp_path = setup_loader
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x60\x05\x70\x03")
        assert loader.load_rom(rom) == b"\x60\x05\x70\x03"
        assert loader.load_rom(str(rom)) == b"\x60\x05\x70\x03"

    def test_load_into_cpu(self, setup_loader):
        loader, tmp_path = setup_loader
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x60\x05\x70\x03\xF0\x15")
        cpu = Chip8Cpu(auto_tick_timers=False)
        loader.load_into(rom, cpu)
        assert cpu.program == b"\x60\x05\x70\x03\xF0\x15"
        for _ in range(3):
            cpu.step()
        assert cpu.delay_timer == 8

    def test_rom_too_large(self, setup_loader):
        loader, tmp_path = setup_loader
        rom = tmp_path / "big.ch8"
        rom.write_bytes(bytes(PROGRAM_CAPACITY + 1))
        with pytest.raises(ProgramTooLargeError):
            loader.load_rom(rom)

    def test_missing_file(self, setup_loader):
        loader, tmp_path = setup_loader
        with pytest.raises(FileNotFoundError):
            loader.load_rom(tmp_path / "missing.ch8")

    def test_empty_rom(self, setup_loader):
        loader, tmp_path = setup_loader
        rom = tmp_path / "empty.ch8"
        rom.write_bytes(b"")
        assert loader.load_rom(rom) == b""
