# retro_chip8/devices/timers.py
"""
60Hzのタイマー刻みを判定するクロック。

実時間の取得関数を注入できるため、テストでは時間を任意に進められます。
"""
import time
from typing import Callable

TIMER_FREQUENCY = 60
TIMER_INTERVAL = 1.0 / TIMER_FREQUENCY

# @intent:responsibility 前回の刻みから1/60秒以上経過したかを判定します。
class TimerClock:
    """
    単調増加する時計を元に、60Hzの刻みが到来したかどうかを判定します。
    """
    def __init__(self, clock: Callable[[], float] = time.monotonic, interval: float = TIMER_INTERVAL):
        if interval <= 0:
            raise ValueError("Timer interval must be positive.")
        self._clock = clock
        self._interval = interval
        self._last_tick = clock()

    # @intent:responsibility 刻みの基準時刻を現在時刻に合わせます。
    def restart(self) -> None:
        self._last_tick = self._clock()

    # @intent:responsibility 刻みが到来していればTrueを返し、基準時刻を現在時刻に更新します。
    # @intent:post-condition 1回の呼び出しで到来する刻みは高々1回です。
    def poll(self) -> bool:
        now = self._clock()
        if now - self._last_tick >= self._interval:
            self._last_tick = now
            return True
        return False
