"""
Tests for the game controller: move flow, scoring, modes, and the
delayed AI turn.
"""

import random

import pytest

from engine.ai_player import AIPlayer
from engine.config import GameConfig
from engine.controller import GameController
from engine.events import RecordingListener
from engine.game_state import GameMode, Mark
from engine.scheduler import ManualScheduler


def make_controller(mode=GameMode.PVP, seed=0):
    scheduler = ManualScheduler()
    controller = GameController(
        mode=mode,
        scheduler=scheduler,
        ai=AIPlayer(Mark.O, rng=random.Random(seed))
    )
    listener = RecordingListener()
    controller.add_listener(listener)
    return controller, scheduler, listener


def play(controller, *indices):
    return [controller.apply_move(index) for index in indices]


def fire_all(scheduler):
    """Fire every queued task, cancelled or not, as a late timer would."""
    tasks, scheduler.tasks = scheduler.tasks, []
    for task in tasks:
        task.callback()


# ==================== MOVE APPLICATION ====================

def test_accepted_move_changes_one_cell_and_switches_turn():
    controller, _, listener = make_controller()
    before = controller.state.board.copy()

    result = controller.apply_move(4)

    assert result.applied
    assert result.index == 4
    assert result.mark == Mark.X
    assert (controller.state.board != before).sum() == 1
    assert controller.state.current_player == Mark.O
    assert listener.of_kind("cell_changed") == [(4, Mark.X)]
    assert listener.of_kind("turn_changed") == [(Mark.O,)]
    assert listener.last_status == "Player O's turn"


def test_turn_alternates_over_a_game():
    controller, _, _ = make_controller()
    players = []
    for index in (0, 1, 2, 4, 3):
        players.append(controller.apply_move(index).mark)
    assert players == [Mark.X, Mark.O, Mark.X, Mark.O, Mark.X]


def test_occupied_cell_is_rejected_without_changes():
    controller, _, listener = make_controller()
    controller.apply_move(0)
    listener.clear()
    board = controller.state.board.copy()

    result = controller.apply_move(0)

    assert not result.applied
    assert "occupied" in result.reason
    assert (controller.state.board == board).all()
    assert controller.state.current_player == Mark.O
    assert listener.events == []


@pytest.mark.parametrize("index", [-1, 9, "3", None])
def test_bad_index_is_rejected(index):
    controller, _, listener = make_controller()
    result = controller.apply_move(index)
    assert not result.applied
    assert result.reason
    assert listener.events == []


def test_win_ends_game_and_scores_once():
    controller, _, listener = make_controller()
    results = play(controller, 0, 3, 1, 4, 2)

    last = results[-1]
    assert last.applied
    assert last.winner == Mark.X
    assert last.winning_line == (0, 1, 2)
    assert last.is_game_over
    assert not controller.state.is_active
    # Winner keeps the turn - no switch after a terminal move
    assert controller.state.current_player == Mark.X
    assert controller.state.score.as_tuple() == (1, 0, 0)
    assert listener.of_kind("winning_line") == [((0, 1, 2),)]
    assert listener.of_kind("score_changed") == [(1, 0, 0)]
    assert listener.last_status == "🎉 Player X wins!"


def test_no_moves_after_game_over():
    controller, _, _ = make_controller()
    play(controller, 0, 3, 1, 4, 2)
    board = controller.state.board.copy()

    result = controller.apply_move(8)

    assert not result.applied
    assert result.reason == "Game is already over!"
    assert (controller.state.board == board).all()
    assert controller.state.current_player == Mark.X
    assert controller.state.score.as_tuple() == (1, 0, 0)


def test_o_can_win():
    controller, _, _ = make_controller()
    results = play(controller, 0, 3, 1, 4, 8, 5)
    assert results[-1].winner == Mark.O
    assert controller.state.score.as_tuple() == (0, 1, 0)


def test_draw_is_detected_after_last_cell():
    controller, _, listener = make_controller()
    # X O X / X O O / O X X
    results = play(controller, 0, 1, 2, 4, 3, 5, 7, 6, 8)

    assert all(r.applied for r in results)
    assert results[-1].is_draw
    assert results[-1].winner is None
    assert not controller.state.is_active
    assert controller.state.score.as_tuple() == (0, 0, 1)
    assert listener.last_status == "🤝 It's a draw!"


def test_win_on_last_cell_is_not_a_draw():
    controller, _, _ = make_controller()
    # X O X / O X O / O X X, last mark completes the 0-4-8 diagonal
    results = play(controller, 0, 1, 2, 3, 4, 5, 7, 6, 8)
    last = results[-1]
    assert last.winner == Mark.X
    assert not last.is_draw
    assert controller.state.score.as_tuple() == (1, 0, 0)


# ==================== RESETS & MODE ====================

def test_reset_game_keeps_score():
    controller, _, listener = make_controller()
    play(controller, 0, 3, 1, 4, 2)
    listener.clear()

    controller.reset_game()

    state = controller.state
    assert state.cells == [Mark.EMPTY] * 9
    assert state.current_player == Mark.X
    assert state.is_active
    assert state.score.as_tuple() == (1, 0, 0)
    assert listener.of_kind("cell_changed") == [(i, Mark.EMPTY) for i in range(9)]
    assert listener.of_kind("turn_changed") == [(Mark.X,)]
    assert listener.last_status == GameConfig.STATUS_NEW_GAME_PVP
    assert listener.of_kind("score_changed") == []


def test_scores_accumulate_across_games():
    controller, _, _ = make_controller()
    play(controller, 0, 3, 1, 4, 2)
    controller.reset_game()
    play(controller, 0, 1, 2, 4, 3, 5, 7, 6, 8)
    controller.reset_game()
    play(controller, 0, 3, 1, 4, 8, 5)
    assert controller.state.score.as_tuple() == (1, 1, 1)


def test_reset_score_keeps_board():
    controller, _, listener = make_controller()
    play(controller, 0, 3, 1, 4, 2)
    controller.reset_game()
    controller.apply_move(4)
    listener.clear()

    controller.reset_score()

    assert controller.state.score.as_tuple() == (0, 0, 0)
    assert controller.state.get_cell(4) == Mark.X
    assert controller.state.current_player == Mark.O
    assert listener.events == [("score_changed", (0, 0, 0))]


def test_set_mode_resets_board_and_reports_mode():
    controller, _, listener = make_controller()
    play(controller, 0, 3, 1, 4, 2)

    controller.set_mode("ai")

    assert controller.mode == GameMode.AI
    assert controller.state.cells == [Mark.EMPTY] * 9
    assert controller.state.score.as_tuple() == (1, 0, 0)
    statuses = [args[0] for args in listener.of_kind("status")]
    assert statuses[-2:] == [GameConfig.STATUS_NEW_GAME_AI, GameConfig.STATUS_MODE_AI]

    controller.set_mode(GameMode.PVP)
    assert listener.last_status == GameConfig.STATUS_MODE_PVP


def test_unknown_mode_raises():
    controller, _, _ = make_controller()
    with pytest.raises(ValueError):
        controller.set_mode("online")


# ==================== AI TURN ====================

def test_ai_reply_is_scheduled_with_delay():
    controller, scheduler, listener = make_controller(GameMode.AI)

    controller.apply_move(0)

    assert controller.pending_ai_turn
    assert [task.delay_ms for task in scheduler.pending] == [GameConfig.AI_DELAY_MS]
    assert listener.last_status == GameConfig.STATUS_TURN_AI
    assert controller.state.current_player == Mark.O

    assert scheduler.run_pending() == 1

    assert not controller.pending_ai_turn
    assert controller.state.get_cell(4) == Mark.O
    assert controller.state.current_player == Mark.X
    assert listener.last_status == GameConfig.STATUS_TURN_HUMAN


def test_human_cannot_move_during_ai_turn():
    controller, scheduler, _ = make_controller(GameMode.AI)
    controller.apply_move(0)

    result = controller.apply_move(8)

    assert not result.applied
    assert result.reason == "Wait for the AI to move!"
    assert controller.state.get_cell(8) == Mark.EMPTY


def test_reset_during_delay_drops_ai_move():
    controller, scheduler, _ = make_controller(GameMode.AI)
    controller.apply_move(0)

    controller.reset_game()

    assert not controller.pending_ai_turn
    assert scheduler.pending == []
    # Even a timer that fires anyway must not touch the new game
    fire_all(scheduler)
    assert controller.state.cells == [Mark.EMPTY] * 9
    assert controller.state.current_player == Mark.X


def test_stale_timer_does_not_move_in_the_next_game():
    controller, scheduler, _ = make_controller(GameMode.AI)
    controller.apply_move(0)
    controller.reset_game()
    controller.apply_move(8)

    # Old (cancelled) timer and the new one both fire
    fire_all(scheduler)

    o_cells = [i for i, mark in enumerate(controller.state.cells) if mark == Mark.O]
    assert o_cells == [4]
    assert controller.state.current_player == Mark.X


def test_mode_switch_during_delay_drops_ai_move():
    controller, scheduler, _ = make_controller(GameMode.AI)
    controller.apply_move(0)
    controller.set_mode(GameMode.PVP)
    fire_all(scheduler)
    assert controller.state.cells == [Mark.EMPTY] * 9


def test_ai_blocks_and_wins():
    controller, scheduler, _ = make_controller(GameMode.AI)

    controller.apply_move(0)
    scheduler.run_pending()          # O takes center
    controller.apply_move(1)
    scheduler.run_pending()          # O blocks on 2
    assert controller.state.get_cell(2) == Mark.O

    controller.apply_move(3)
    scheduler.run_pending()          # O wins on 6 (diagonal 2-4-6)
    state = controller.state
    assert state.winner == Mark.O
    assert state.winning_line == (2, 4, 6)
    assert state.score.as_tuple() == (0, 1, 0)


def test_no_ai_turn_after_human_wins():
    controller, scheduler, _ = make_controller(GameMode.AI)
    controller.state.board[[0, 1]] = Mark.X
    controller.state.board[[3, 4]] = Mark.O

    result = controller.apply_move(2)

    assert result.winner == Mark.X
    assert not controller.pending_ai_turn
    assert scheduler.pending == []


def test_run_ai_turn_outside_ai_turn_is_rejected():
    controller, _, _ = make_controller(GameMode.PVP)
    result = controller.run_ai_turn()
    assert not result.applied
    assert result.reason == "Not the AI's turn"


def test_immediate_scheduler_plays_ai_right_away():
    controller = GameController(mode=GameMode.AI, ai=AIPlayer(Mark.O, rng=random.Random(1)))
    controller.apply_move(0)
    assert controller.state.get_cell(4) == Mark.O
    assert controller.state.current_player == Mark.X
    assert not controller.pending_ai_turn


def test_ai_game_always_finishes():
    for seed in range(10):
        rng = random.Random(seed)
        controller, scheduler, _ = make_controller(GameMode.AI, seed=seed)
        while controller.state.is_active:
            move = rng.choice(controller.state.get_empty_cells())
            assert controller.apply_move(move).applied
            scheduler.run_pending()
        assert sum(controller.state.score.as_tuple()) == 1


# ==================== LISTENERS ====================

def test_controllers_are_independent():
    first, _, _ = make_controller()
    second, _, _ = make_controller()
    first.apply_move(0)
    assert second.state.get_cell(0) == Mark.EMPTY


def test_publish_state_sends_everything():
    controller, _, listener = make_controller()
    controller.apply_move(4)
    listener.clear()

    controller.publish_state()

    cells = listener.of_kind("cell_changed")
    assert len(cells) == 9
    assert cells[4] == (4, Mark.X)
    assert listener.of_kind("turn_changed") == [(Mark.O,)]
    assert listener.of_kind("score_changed") == [(0, 0, 0)]
    assert listener.last_status == "Player O's turn"


def test_removed_listener_hears_nothing():
    controller, _, listener = make_controller()
    controller.remove_listener(listener)
    controller.apply_move(0)
    assert listener.events == []


# ==================== AI LIFECYCLE ====================

def test_run_ai_turn_cancels_the_scheduled_reply():
    controller, scheduler, _ = make_controller(GameMode.AI)
    controller.apply_move(0)

    result = controller.run_ai_turn()

    assert result.applied
    assert not controller.pending_ai_turn
    assert scheduler.pending == []

    # The next human move gets exactly one fresh timer
    controller.apply_move(8)
    assert len(scheduler.pending) == 1
    fire_all(scheduler)
    o_cells = [i for i, mark in enumerate(controller.state.cells) if mark == Mark.O]
    assert len(o_cells) == 2
    assert controller.state.current_player == Mark.X


def test_ai_must_play_o():
    with pytest.raises(ValueError):
        GameController(mode=GameMode.AI, ai=AIPlayer(Mark.X))
