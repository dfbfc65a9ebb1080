import random

import pytest

from recall.components.round_config import RoundConfig
from recall.components.round_state import RoundEndReason, RoundPhase
from recall.components.session_state import Tier
from recall.components.tile_slot import SelectionOutcome, TileVisual
from recall.errors import ConfigError
from recall.events.bus import (
    EVENT_PHASE_CHANGED,
    EVENT_ROUND_ENDED,
    EVENT_TILE_CLICK,
    EVENT_TILE_VISUAL_CHANGED,
)
from recall.systems.score_tracker import ScoreTracker

from helpers import build_engine, capture, run_for, wrong_index

EASY = ScoreTracker().config_for(Tier.EASY)
HARD = ScoreTracker().config_for(Tier.HARD)


def _to_selection(bus, engine, config=EASY):
    engine.begin_round(config)
    run_for(bus, config.memorize_duration_ms)
    assert engine.phase is RoundPhase.AWAITING_SELECTION


@pytest.mark.parametrize("config", [EASY, HARD])
@pytest.mark.parametrize("seed", range(5))
def test_target_set_size_and_range(config, seed):
    _, _, board, _, engine = build_engine(seed=seed)
    targets = engine.begin_round(config)
    assert len(targets) == config.tiles_to_remember
    assert all(0 <= index < board.size for index in targets)


def test_memorize_phase_highlights_targets_with_board_disabled():
    bus, _, board, _, engine = build_engine()
    phases = capture(bus, EVENT_PHASE_CHANGED)
    targets = engine.begin_round(EASY)

    assert engine.phase is RoundPhase.MEMORIZING
    assert not board.enabled
    assert {slot.index for slot in board.slots() if slot.visual is TileVisual.SHOWN} == set(targets)
    assert phases == [{"phase": RoundPhase.MEMORIZING, "remaining_ms": 3000}]


def test_memorize_finish_hides_targets_and_enables_board():
    bus, _, board, _, engine = build_engine()
    phases = capture(bus, EVENT_PHASE_CHANGED)
    engine.begin_round(EASY)
    run_for(bus, 3000, step_ms=1000)

    assert engine.phase is RoundPhase.AWAITING_SELECTION
    assert board.enabled
    assert all(slot.visual is TileVisual.BLANK for slot in board.slots())
    assert [p["remaining_ms"] for p in phases] == [3000, 2000, 1000, 5000]
    assert phases[-1]["phase"] is RoundPhase.AWAITING_SELECTION


def test_selections_ignored_while_memorizing():
    bus, _, _, _, engine = build_engine()
    targets = engine.begin_round(EASY)
    assert engine.on_tile_selected(next(iter(targets))) is None
    assert engine.phase is RoundPhase.MEMORIZING


@pytest.mark.parametrize("config", [EASY, HARD])
def test_selecting_all_targets_in_any_order_succeeds(config):
    bus, _, board, _, engine = build_engine(seed=3)
    ended = capture(bus, EVENT_ROUND_ENDED)
    _to_selection(bus, engine, config)

    order = sorted(engine.targets, reverse=True)
    outcomes = [engine.on_tile_selected(index) for index in order]

    assert outcomes == [SelectionOutcome.MARKED_CORRECT] * config.tiles_to_remember
    assert engine.phase is RoundPhase.ROUND_COMPLETE
    assert engine.reason is RoundEndReason.SUCCESS
    assert not board.enabled
    assert engine.active_clock is None
    assert [e["reason"] for e in ended] == [RoundEndReason.SUCCESS]


def test_wrong_tile_ends_game_and_reveals_targets():
    bus, _, board, _, engine = build_engine(seed=1)
    ended = capture(bus, EVENT_ROUND_ENDED)
    _to_selection(bus, engine)
    targets = sorted(engine.targets)

    engine.on_tile_selected(targets[0])
    engine.on_tile_selected(targets[1])
    assert engine.on_tile_selected(wrong_index(targets)) is SelectionOutcome.MARKED_WRONG

    assert engine.phase is RoundPhase.GAME_OVER
    assert engine.reason is RoundEndReason.WRONG_TILE
    assert ended[0]["correct_selections"] == 2
    assert board.slot(targets[0]).visual is TileVisual.CORRECT
    assert all(board.slot(i).visual is TileVisual.SHOWN for i in targets[2:])
    assert not board.enabled

    # Late clock ticks never reach the finished round.
    run_for(bus, 10_000)
    assert len(ended) == 1


def test_selection_timeout_reveals_remaining_targets():
    bus, _, board, _, engine = build_engine(seed=2)
    ended = capture(bus, EVENT_ROUND_ENDED)
    _to_selection(bus, engine)
    first = sorted(engine.targets)[0]
    engine.on_tile_selected(first)

    run_for(bus, 4750)
    assert engine.phase is RoundPhase.AWAITING_SELECTION
    run_for(bus, 250)

    assert engine.reason is RoundEndReason.TIMEOUT
    assert ended == [{
        "reason": RoundEndReason.TIMEOUT,
        "correct_selections": 1,
        "targets": engine.targets,
    }]
    assert board.slot(first).visual is TileVisual.CORRECT
    assert all(board.slot(i).visual is TileVisual.SHOWN for i in engine.targets if i != first)


def test_timeout_with_no_selections():
    bus, _, _, _, engine = build_engine()
    _to_selection(bus, engine)
    run_for(bus, 5000)
    assert engine.reason is RoundEndReason.TIMEOUT
    assert engine.state.correct_selections == 0


def test_reselecting_correct_tile_is_already_selected():
    bus, _, _, _, engine = build_engine()
    _to_selection(bus, engine)
    index = next(iter(engine.targets))
    engine.on_tile_selected(index)
    assert engine.on_tile_selected(index) is SelectionOutcome.ALREADY_SELECTED
    assert engine.state.correct_selections == 1
    assert engine.phase is RoundPhase.AWAITING_SELECTION


def test_reentrant_selection_during_evaluation_is_not_double_counted():
    bus, _, _, _, engine = build_engine()
    _to_selection(bus, engine)
    index = next(iter(engine.targets))
    nested: list = []

    def on_visual(sender, **payload):
        nested.append(engine.on_tile_selected(payload["index"]))

    bus.subscribe(EVENT_TILE_VISUAL_CHANGED, on_visual)
    assert engine.on_tile_selected(index) is SelectionOutcome.MARKED_CORRECT
    assert nested == [SelectionOutcome.ALREADY_SELECTED]
    assert engine.state.correct_selections == 1


def test_invalid_selection_is_ignored():
    bus, _, _, _, engine = build_engine()
    _to_selection(bus, engine)
    assert engine.on_tile_selected(99) is None
    assert engine.phase is RoundPhase.AWAITING_SELECTION
    assert not engine.state.evaluating


def test_tile_click_event_drives_selection():
    bus, _, _, _, engine = build_engine()
    _to_selection(bus, engine)
    for index in engine.targets:
        bus.emit(EVENT_TILE_CLICK, index=index)
    bus.emit(EVENT_TILE_CLICK)
    assert engine.reason is RoundEndReason.SUCCESS


def test_game_over_ignores_further_selections():
    bus, _, _, _, engine = build_engine()
    _to_selection(bus, engine)
    engine.on_tile_selected(wrong_index(engine.targets))
    assert engine.on_tile_selected(next(iter(engine.targets))) is None
    assert engine.phase is RoundPhase.GAME_OVER


def test_cancel_during_memorize_stops_the_phase_clock():
    bus, _, board, clocks, engine = build_engine()
    ended = capture(bus, EVENT_ROUND_ENDED)
    engine.begin_round(EASY)
    engine.cancel()
    run_for(bus, 20_000)

    assert engine.phase is RoundPhase.IDLE
    assert ended == []
    assert not board.enabled
    assert clocks.active_count == 0


def test_new_round_cancels_previous_clock():
    bus, _, _, clocks, engine = build_engine()
    engine.begin_round(EASY)
    run_for(bus, 2000)
    engine.begin_round(EASY)
    run_for(bus, 2000)
    assert engine.phase is RoundPhase.MEMORIZING
    assert clocks.active_count == 1


@pytest.mark.parametrize("tiles", [0, 36, 40])
def test_invalid_tile_count_raises_config_error(tiles):
    _, _, _, _, engine = build_engine()
    with pytest.raises(ConfigError):
        engine.begin_round(RoundConfig(tiles_to_remember=tiles))
    assert engine.phase is RoundPhase.IDLE


def test_targets_follow_injected_rng():
    first = build_engine(seed=7)[4].begin_round(EASY)
    second = build_engine(seed=7)[4].begin_round(EASY)
    assert first == second
    assert first == frozenset(random.Random(7).sample(range(36), 4))


def test_memorize_handoff_leaves_single_selection_clock():
    bus, _, _, clocks, engine = build_engine()
    _to_selection(bus, engine)
    assert clocks.active_count == 1
    assert engine.active_clock.active
    assert engine.active_clock.remaining_ms == EASY.selection_duration_ms


def test_next_round_passes_through_idle_after_success():
    bus, _, _, _, engine = build_engine()
    _to_selection(bus, engine)
    for index in engine.targets:
        engine.on_tile_selected(index)
    phases = capture(bus, EVENT_PHASE_CHANGED)

    engine.begin_round(EASY)

    assert phases == [
        {"phase": RoundPhase.IDLE, "remaining_ms": None},
        {"phase": RoundPhase.MEMORIZING, "remaining_ms": 3000},
    ]
