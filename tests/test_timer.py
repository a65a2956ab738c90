from stroop.app.timer import PrecisionTimer


def test_elapsed_is_zero_before_start(scheduler):
    timer = PrecisionTimer(scheduler)
    assert timer.get_elapsed_time() == 0.0
    assert not timer.is_running


def test_get_elapsed_time_reads_the_clock(scheduler, clock):
    timer = PrecisionTimer(scheduler)
    timer.start()
    clock.advance(420)
    assert timer.get_elapsed_time() == 420


def test_start_is_idempotent(scheduler, clock):
    timer = PrecisionTimer(scheduler)
    timer.start()
    clock.advance(100)
    timer.start()
    clock.advance(100)
    assert timer.get_elapsed_time() == 200


def test_display_value_follows_frames_and_freezes_on_stop(scheduler, advance):
    timer = PrecisionTimer(scheduler, frame_ms=16)
    timer.start()
    advance(16)
    advance(16)
    assert timer.elapsed_time == 32
    timer.stop()
    advance(160)
    assert timer.elapsed_time == 32
    assert not timer.is_running
    # stop() keeps the origin; only reset() clears it
    assert timer.get_elapsed_time() == 192


def test_reset_clears_origin_and_display(scheduler, advance):
    timer = PrecisionTimer(scheduler)
    timer.start()
    advance(100)
    timer.reset()
    assert timer.elapsed_time == 0.0
    assert timer.get_elapsed_time() == 0.0
    timer.start()
    advance(50)
    assert timer.get_elapsed_time() == 50


def test_stop_after_start_leaves_no_frame_callback(scheduler):
    timer = PrecisionTimer(scheduler)
    timer.start()
    assert scheduler.pending == 1
    timer.stop()
    assert scheduler.pending == 0


def test_hidden_host_stops_a_running_timer(scheduler, advance):
    timer = PrecisionTimer(scheduler, frame_ms=10)
    timer.start()
    advance(30)
    timer.handle_visibility_change(True)
    assert not timer.is_running
    advance(1000)
    assert timer.elapsed_time == 30
