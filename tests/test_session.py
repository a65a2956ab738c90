from stroop.app.session import StroopSession
from stroop.core.types import AnswerOutcome, ColorName, GameStatus


def play(session, advance):
    session.start_game(5)
    advance(session.store.config.countdown_ms)
    assert session.status == GameStatus.PLAYING


def test_entering_playing_arms_timer_and_deadline(session, advance):
    play(session, advance)
    assert session.armed
    assert session.is_timer_running
    assert session.timeout_ms == 5000
    assert session.speed_level == "1x"


def test_answer_records_reaction_time_and_disarms(session, advance, scheduler):
    play(session, advance)
    advance(430)
    session.select_color(session.current_challenge.ink_color)
    last = session.rounds[-1]
    assert last.outcome == AnswerOutcome.SUCCESS
    assert last.reaction_time_ms == 430
    assert not session.armed
    assert not session.is_timer_running
    assert scheduler.pending == 0


def test_deadline_forces_timeout(session, advance):
    play(session, advance)
    session.select_color(session.current_challenge.ink_color)
    session.next_round()
    assert session.current_streak == 1

    advance(4999)
    assert session.status == GameStatus.PLAYING
    advance(1)
    last = session.rounds[-1]
    assert last.outcome == AnswerOutcome.TIMEOUT
    assert last.reaction_time_ms == 5000
    assert last.selected_color is None
    assert session.current_streak == 0
    assert session.status == GameStatus.PAUSED


def test_late_answer_after_timeout_is_absorbed(session, advance):
    play(session, advance)
    advance(5000)
    assert len(session.rounds) == 1
    session.select_color(ColorName.RED)
    session.store.submit_answer(ColorName.RED, 10)
    assert len(session.rounds) == 1


def test_answer_cancels_the_deadline_for_good(session, advance):
    play(session, advance)
    advance(100)
    session.select_color(session.current_challenge.ink_color)
    advance(10_000)
    assert len(session.rounds) == 1
    assert session.rounds[0].outcome == AnswerOutcome.SUCCESS


def test_no_stale_deadline_fires_into_next_round(session, advance):
    play(session, advance)
    advance(4000)
    session.select_color(session.current_challenge.ink_color)
    session.next_round()
    # the first round's deadline would have been at +5000
    advance(1500)
    assert session.status == GameStatus.PLAYING
    assert len(session.rounds) == 1


def test_time_remaining_is_polled(session, advance):
    play(session, advance)
    assert session.time_remaining == 5000
    advance(50)
    advance(50)
    assert session.time_remaining == 4900
    assert session.elapsed_time >= 96


def test_budget_shrinks_with_streak(session, advance):
    session.start_game(12)
    advance(3000)
    for _ in range(5):
        session.select_color(session.current_challenge.ink_color)
        session.next_round()
    assert session.current_streak == 5
    assert session.timeout_ms == 4000
    assert session.speed_level == "1.25x"

    advance(4000)
    assert session.rounds[-1].outcome == AnswerOutcome.TIMEOUT
    assert session.rounds[-1].reaction_time_ms == 4000
    session.next_round()
    assert session.timeout_ms == 5000


def test_pause_cancels_and_resume_rearms_full_budget(session, advance, scheduler):
    play(session, advance)
    advance(3000)
    session.pause_game()
    assert not session.armed
    assert not session.is_timer_running
    assert scheduler.pending == 0

    advance(60_000)
    assert session.rounds == ()

    session.resume_game()
    assert session.armed
    advance(300)
    session.select_color(session.current_challenge.ink_color)
    assert session.rounds[-1].reaction_time_ms == 300


def test_hidden_host_pauses_mid_round(session, advance):
    play(session, advance)
    advance(200)
    session.handle_visibility_change(True)
    assert session.status == GameStatus.PAUSED
    assert not session.is_timer_running
    advance(30_000)
    assert session.rounds == ()

    session.handle_visibility_change(False)
    assert session.status == GameStatus.PAUSED
    session.resume_game()
    advance(250)
    session.select_color(session.current_challenge.ink_color)
    assert session.rounds[-1].reaction_time_ms == 250


def test_countdown_ending_while_hidden_does_not_start_the_clock(session, advance, scheduler):
    session.start_game(5)
    advance(1000)
    session.handle_visibility_change(True)
    advance(2000)
    assert session.status == GameStatus.PAUSED
    assert session.current_round_number == 1
    assert not session.armed
    assert not session.is_timer_running
    assert scheduler.pending == 0

    advance(5000)
    assert session.rounds == ()

    session.handle_visibility_change(False)
    assert session.status == GameStatus.PAUSED
    session.resume_game()
    assert session.armed
    advance(300)
    session.select_color(session.current_challenge.ink_color)
    assert session.rounds[-1].outcome == AnswerOutcome.SUCCESS
    assert session.rounds[-1].reaction_time_ms == 300


def test_next_round_while_hidden_holds_the_new_round(session, advance):
    play(session, advance)
    session.select_color(session.current_challenge.ink_color)
    session.handle_visibility_change(True)
    session.next_round()
    assert session.status == GameStatus.PAUSED
    assert session.current_round_number == 2
    assert not session.armed

    advance(5000)
    assert len(session.rounds) == 1
    assert session.current_streak == 1

    # still in the background: resuming is held again
    session.resume_game()
    assert session.status == GameStatus.PAUSED
    assert not session.armed

    session.handle_visibility_change(False)
    session.resume_game()
    assert session.status == GameStatus.PLAYING
    advance(200)
    session.select_color(session.current_challenge.ink_color)
    assert session.rounds[-1].reaction_time_ms == 200
    assert session.current_streak == 2


def test_reset_mid_round_leaves_nothing_scheduled(session, advance, scheduler):
    play(session, advance)
    advance(1000)
    session.reset_game()
    assert session.status == GameStatus.IDLE
    assert scheduler.pending == 0
    assert session.elapsed_time == 0
    advance(10_000)
    assert session.status == GameStatus.IDLE


def test_finish_disarms(session, advance, scheduler):
    session.start_game(2)
    advance(3000)
    session.select_color(session.current_challenge.ink_color)
    session.next_round()
    session.select_color(session.current_challenge.word)
    assert session.status == GameStatus.FINISHED
    assert scheduler.pending == 0
    assert session.stats.total_rounds == 2
    assert session.stats.impulse_errors == 1


def test_select_color_outside_playing_is_ignored(session):
    session.select_color(ColorName.RED)
    assert session.rounds == ()
    assert session.status == GameStatus.IDLE


def test_close_cancels_countdown_and_round(session, advance, scheduler):
    session.start_game(3)
    session.close()
    advance(10_000)
    assert session.status == GameStatus.COUNTDOWN
    assert scheduler.pending == 0


def test_default_construction_shares_one_scheduler(scheduler):
    s = StroopSession(scheduler=scheduler)
    assert s.store.scheduler is scheduler
    assert s.timer.scheduler is scheduler
