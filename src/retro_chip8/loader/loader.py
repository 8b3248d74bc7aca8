# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
CHIP-8 のバイナリROMファイル（.ch8）の読み込みをサポートします。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.core.errors import ProgramTooLargeError
from retro_chip8.arch.chip8.cpu import Chip8Cpu, PROGRAM_CAPACITY

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

class RomLoader:
    """
    バイナリROMファイルを読み込み、CPUへロードするローダー。
    """
    # @intent:responsibility ファイル全体をバイト列として読み込み、プログラム領域に収まるか検査します。
    def load_rom(self, file_path: PathLike) -> bytes:
        path = Path(file_path)
        data = path.read_bytes()
        if len(data) > PROGRAM_CAPACITY:
            raise ProgramTooLargeError(len(data), PROGRAM_CAPACITY)
        if not data:
            logger.warning("ROM file %s is empty", path)
        return data

    # @intent:responsibility ROMファイルを読み込み、CPUへロードします。
    def load_into(self, file_path: PathLike, cpu: Chip8Cpu) -> bytes:
        data = self.load_rom(file_path)
        cpu.load(data)
        logger.info("Loaded ROM %s (%d bytes)", file_path, len(data))
        return data
