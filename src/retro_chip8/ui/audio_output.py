# src/retro_chip8/ui/audio_output.py
"""
ビープ音出力。
QAudioSinkがプル方式でPCMを要求し、ToneGeneratorがサウンドタイマーの状態に応じて波形を返します。
"""
import logging
from typing import Callable

from PySide6.QtCore import QIODevice
from PySide6.QtMultimedia import QAudioFormat, QAudioSink, QMediaDevices

from retro_chip8.audio.tone import ToneGenerator
from retro_chip8.config.models import AudioConfig

logger = logging.getLogger(__name__)

BYTES_PER_SAMPLE = 2

# @intent:responsibility QAudioSinkから読み出される無限長のPCMストリームです。
class ToneDevice(QIODevice):
    def __init__(self, generator: ToneGenerator, is_active: Callable[[], bool], parent=None):
        super().__init__(parent)
        self._generator = generator
        self._is_active = is_active

    def readData(self, maxlen: int) -> bytes:
        count = maxlen // BYTES_PER_SAMPLE
        return self._generator.generate(count, self._is_active())

    def writeData(self, data) -> int:
        return -1

    def bytesAvailable(self) -> int:
        return self._generator.sample_rate * BYTES_PER_SAMPLE + super().bytesAvailable()

    def isSequential(self) -> bool:
        return True


# @intent:responsibility 既定の出力デバイスでビープ音を鳴らします。
class Beeper:
    def __init__(self, config: AudioConfig, is_active: Callable[[], bool], parent=None):
        self._generator = ToneGenerator(config.sample_rate, config.frequency, config.volume)
        fmt = QAudioFormat()
        fmt.setSampleRate(config.sample_rate)
        fmt.setChannelCount(1)
        fmt.setSampleFormat(QAudioFormat.SampleFormat.Int16)
        self._device = ToneDevice(self._generator, is_active, parent)
        self._sink = QAudioSink(QMediaDevices.defaultAudioOutput(), fmt, parent)

    def start(self) -> None:
        self._device.open(QIODevice.OpenModeFlag.ReadOnly)
        self._sink.start(self._device)
        logger.debug("Audio output started")

    def stop(self) -> None:
        self._sink.stop()
        self._device.close()
