from retro_chip8.transport.bus import Bus
from retro_chip8.devices.random_source import SeededRandomSource
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.loader.loader import RomLoader
from .models import EmulatorConfig

# @intent:responsibility 設定（Config）に基づいてBusとデバイスを生成・接続し、CPUを組み立てます。
class SystemBuilder:
    def build_system(self, config: EmulatorConfig) -> Chip8Cpu:
        bus = Bus(random_source=SeededRandomSource(config.cpu.seed))
        cpu = Chip8Cpu(bus)

        if config.rom:
            RomLoader().load_into(config.rom, cpu)

        return cpu
