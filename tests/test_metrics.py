import time

import pytest

from hivegame import metrics
from hivegame.movement import MovePiece, Pass, PlacePiece
from hivegame.piece import Color, Insect, Piece
from hivegame.position import Position


@pytest.fixture
def provider():
    return metrics.init_meter_provider()


def test_init_replaces_global_provider():
    first = metrics.init_meter_provider()
    assert metrics.get_meter_provider() is first
    second = metrics.init_meter_provider()
    assert metrics.get_meter_provider() is second
    assert second is not first


def test_counter_accumulates_per_attributes(provider):
    metrics.increment_games_played(Color.WHITE)
    metrics.increment_games_played(Color.WHITE)
    metrics.increment_games_played(Color.BLACK)
    counter = provider.counter("games_played_total")
    assert counter.value({"model_color": "white"}) == 2
    assert counter.value({"model_color": "black"}) == 1


def test_counter_rejects_negative(provider):
    with pytest.raises(ValueError):
        provider.counter("x").add(-1)


def test_kind_conflict_raises(provider):
    provider.counter("shared")
    with pytest.raises(ValueError):
        provider.gauge("shared")


def test_games_finished_draw_label(provider):
    metrics.increment_games_finished(Color.BLACK, None)
    metrics.increment_games_finished(Color.BLACK, Color.WHITE)
    counter = provider.counter("games_finished_total")
    assert counter.value({"model_color": "black", "winner": "draw"}) == 1
    assert counter.value({"winner": "white", "model_color": "black"}) == 1


def test_move_made_labels(provider):
    piece = Piece(Insect.QUEEN_BEE, Color.WHITE, 0)
    metrics.increment_move_made(PlacePiece(piece, Position(16, 16)), Color.WHITE)
    metrics.increment_move_made(
        MovePiece(piece, Position(16, 16), Position(16, 17)), Color.WHITE
    )
    metrics.increment_move_made(Pass(), Color.BLACK)
    counter = provider.counter("moves_made_total")
    assert counter.value(
        {"move_type": "place_piece", "piece": "queen_bee", "model_color": "white"}
    ) == 1
    assert counter.value(
        {"move_type": "move_piece", "piece": "queen_bee", "model_color": "white"}
    ) == 1
    assert counter.value(
        {"move_type": "pass", "piece": "none", "model_color": "black"}
    ) == 1


def test_gauges_keep_last_value(provider):
    metrics.record_epoch(3)
    metrics.record_epoch(7)
    assert provider.gauge("epoch").value() == 7
    metrics.record_training_status(True)
    assert provider.gauge("is_training").value() == 1.0
    metrics.record_training_status(False)
    assert provider.gauge("is_training").value() == 0.0
    metrics.record_learning_rate(2e-4)
    assert provider.gauge("learning_rate").value() == 2e-4


def test_unrecorded_gauge_is_none(provider):
    assert provider.gauge("value_fn_mse").value() is None


def test_training_start_time_is_recent(provider):
    before = int(time.time())
    metrics.record_training_start_time()
    recorded = provider.gauge("train_start_time").value()
    assert before <= recorded <= time.time()


def test_game_turns_histogram(provider):
    metrics.record_game_turns(25, Color.WHITE)
    metrics.record_game_turns(25, Color.WHITE)
    hist = provider.histogram("turns_played")
    counts = hist.bucket_counts({"model_color": "white"})
    assert len(counts) == len(hist.boundaries) + 1
    assert sum(counts) == 2
    index = counts.index(2)
    assert hist.boundaries[index - 1] < 25 <= hist.boundaries[index]


def test_histogram_value_on_boundary_and_overflow(provider):
    hist = provider.histogram("h", boundaries=[1.0, 2.0])
    hist.record(1.0)
    hist.record(5.0)
    counts = hist.bucket_counts()
    assert counts[0] == 1
    assert counts[-1] == 1


def test_minibatch_statistics_sum(provider):
    metrics.record_minibatch_statistics(0.5, 0.25, 1.0)
    metrics.record_minibatch_statistics(0.5, 0.25, 1.0)
    assert provider.counter("training_iterations_count_total").value() == 2
    assert provider.counter("training_value_loss_total").value() == pytest.approx(1.0)
    assert provider.counter("training_policy_loss_total").value() == pytest.approx(0.5)
    assert provider.counter("training_entropy_loss_total").value() == pytest.approx(2.0)


def test_shutdown_twice_raises(provider):
    provider.shutdown()
    assert provider.is_shut_down
    with pytest.raises(RuntimeError):
        provider.shutdown()