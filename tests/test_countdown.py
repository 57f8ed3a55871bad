"""Tests for the session countdown."""

from timeline.countdown import Countdown


def test_idle_until_started() -> None:
    c = Countdown(10)
    c.update(5)
    assert c.remaining == 10
    assert c.format() == "00:10"


def test_expires_once() -> None:
    fired = []
    c = Countdown(3, on_expire=lambda: fired.append(True))
    c.start()
    c.update(2.5)
    assert not c.expired
    assert c.format() == "00:01"
    c.update(1.0)
    assert c.expired
    assert c.remaining == 0
    c.update(1.0)
    c.start()
    c.update(1.0)
    assert fired == [True]


def test_reset() -> None:
    c = Countdown(900)
    c.start()
    c.update(900)
    assert c.expired
    c.reset()
    assert not c.expired
    assert not c.running
    assert c.format() == "15:00"
