import pytest


def test_call_later_fires_once_when_due(scheduler, advance):
    fired = []
    scheduler.call_later(100, lambda: fired.append("a"))
    advance(99)
    assert fired == []
    advance(1)
    assert fired == ["a"]
    advance(1000)
    assert fired == ["a"]


def test_calls_fire_in_deadline_order(scheduler, advance):
    fired = []
    scheduler.call_later(30, lambda: fired.append(30))
    scheduler.call_later(10, lambda: fired.append(10))
    scheduler.call_later(20, lambda: fired.append(20))
    advance(50)
    assert fired == [10, 20, 30]


def test_cancelled_call_never_fires(scheduler, advance):
    fired = []
    handle = scheduler.call_later(10, lambda: fired.append(1))
    handle.cancel()
    handle.cancel()
    advance(20)
    assert fired == []
    assert not handle.active


def test_callback_can_cancel_a_call_due_in_the_same_tick(scheduler, advance):
    fired = []
    second = scheduler.call_later(20, lambda: fired.append("second"))
    scheduler.call_later(10, lambda: (fired.append("first"), second.cancel()))
    advance(30)
    assert fired == ["first"]


def test_call_every_repeats_until_cancelled(scheduler, advance):
    ticks = []
    handle = scheduler.call_every(50, lambda: ticks.append(1))
    for _ in range(4):
        advance(50)
    assert len(ticks) == 4
    handle.cancel()
    advance(500)
    assert len(ticks) == 4


def test_call_every_skips_missed_beats_after_a_stall(scheduler, advance):
    ticks = []
    scheduler.call_every(50, lambda: ticks.append(1))
    advance(1000)
    assert len(ticks) == 1


def test_call_every_rejects_non_positive_interval(scheduler):
    with pytest.raises(ValueError):
        scheduler.call_every(0, lambda: None)


def test_cancel_all_and_pending(scheduler, advance):
    fired = []
    scheduler.call_later(10, lambda: fired.append(1))
    scheduler.call_every(10, lambda: fired.append(2))
    assert scheduler.pending == 2
    scheduler.cancel_all()
    assert scheduler.pending == 0
    advance(100)
    assert fired == []
