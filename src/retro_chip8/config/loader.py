import yaml
from typing import Dict, Any, Optional
from .models import EmulatorConfig, CpuConfig, DisplayConfig, AudioConfig, DEFAULT_KEYMAP

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r', encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError("Configuration root must be a mapping.")

        cpu_data = data.get("cpu") or {}
        cycles = self._parse_int(cpu_data.get("cycles_per_frame", 10), "cpu.cycles_per_frame")
        if cycles <= 0:
            raise ValueError(f"cpu.cycles_per_frame must be positive: {cycles}")
        seed = cpu_data.get("seed")
        cpu = CpuConfig(
            cycles_per_frame=cycles,
            seed=None if seed is None else self._parse_int(seed, "cpu.seed"),
            halt_on_error=bool(cpu_data.get("halt_on_error", True)),
        )

        display_data = data.get("display") or {}
        scale = self._parse_int(display_data.get("scale", 10), "display.scale")
        if scale <= 0:
            raise ValueError(f"display.scale must be positive: {scale}")
        display = DisplayConfig(
            scale=scale,
            foreground=str(display_data.get("foreground", "#FFFFFF")),
            background=str(display_data.get("background", "#000000")),
        )

        audio_data = data.get("audio") or {}
        audio = AudioConfig(
            enabled=bool(audio_data.get("enabled", True)),
            frequency=float(audio_data.get("frequency", 604.1)),
            sample_rate=self._parse_int(audio_data.get("sample_rate", 44100), "audio.sample_rate"),
            volume=float(audio_data.get("volume", 0.25)),
        )

        keymap = dict(DEFAULT_KEYMAP)
        for name, value in (data.get("keymap") or {}).items():
            key = self._parse_int(value, f"keymap.{name}")
            if not 0 <= key <= 0xF:
                raise ValueError(f"keymap.{name} must be a key between 0 and 15: {key}")
            keymap[str(name)] = key

        rom: Optional[str] = data.get("rom")

        return EmulatorConfig(cpu=cpu, display=display, audio=audio, keymap=keymap, rom=rom)

    def _parse_int(self, value: Any, name: str = "value") -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format for {name}: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ValueError(f"Invalid integer format for {name}: {value}")
