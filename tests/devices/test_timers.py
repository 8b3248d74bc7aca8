# tests/devices/test_timers.py
import pytest

from retro_chip8.devices.timers import TimerClock, TIMER_INTERVAL


class TestTimerClock:
    def test_poll_before_interval(self, fake_clock):
        clock = TimerClock(fake_clock)
        fake_clock.advance(TIMER_INTERVAL / 2)
        assert clock.poll() is False

    def test_poll_after_interval_resets_reference(self, fake_clock):
        clock = TimerClock(fake_clock)
        fake_clock.advance(TIMER_INTERVAL)
        assert clock.poll() is True
        assert clock.poll() is False

    def test_at_most_one_tick_per_poll(self, fake_clock):
        clock = TimerClock(fake_clock)
        fake_clock.advance(TIMER_INTERVAL * 5)
        assert clock.poll() is True
        assert clock.poll() is False

    def test_restart(self, fake_clock):
        clock = TimerClock(fake_clock)
        fake_clock.advance(TIMER_INTERVAL * 0.9)
        clock.restart()
        fake_clock.advance(TIMER_INTERVAL * 0.9)
        assert clock.poll() is False

    def test_invalid_interval(self, fake_clock):
        with pytest.raises(ValueError):
            TimerClock(fake_clock, interval=0)
