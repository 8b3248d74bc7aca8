# retro_chip8/audio/tone.py
"""
ビープ音の波形生成。

サウンドタイマーが0でない間だけ正弦波を出力し、それ以外は無音を出力します。
サウンドタイマーの減算はコア側で行われ、ここでは値を読むだけです。
"""
import numpy as np

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_FREQUENCY = 604.1
MAX_AMPLITUDE = 0x7FFF
TWO_PI = 2.0 * np.pi

# @intent:responsibility 位相を連続させたまま、符号付き16bitリトルエンディアンのPCMを生成します。
class ToneGenerator:
    def __init__(self, sample_rate: int = DEFAULT_SAMPLE_RATE, frequency: float = DEFAULT_FREQUENCY,
                 volume: float = 0.25):
        if sample_rate <= 0:
            raise ValueError("Sample rate must be positive.")
        if frequency <= 0:
            raise ValueError("Tone frequency must be positive.")
        if not 0.0 <= volume <= 1.0:
            raise ValueError("Volume must be between 0.0 and 1.0.")
        self.sample_rate = sample_rate
        self.frequency = frequency
        self.amplitude = int(MAX_AMPLITUDE * volume)
        self._omega = TWO_PI * frequency / sample_rate
        self._phase = 0.0

    # @intent:responsibility `count` サンプル分のPCMを返します。activeがFalseなら無音です。
    def generate(self, count: int, active: bool) -> bytes:
        if not active:
            return np.zeros(count, dtype="<i2").tobytes()
        x_values = self._phase + np.arange(count) * self._omega
        wave = self.amplitude * np.sin(x_values)
        # 次のブロックはこのブロックの直後の位相から始める
        self._phase = (self._phase + count * self._omega) % TWO_PI
        return wave.astype("<i2").tobytes()
