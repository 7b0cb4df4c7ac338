import numpy as np
import pytest

from hivegame.hypers import INPUT_ENCODED_DIMS, OUTPUT_LENGTH
from hivegame.model import HiveModel

BOARD = 26


def _inputs(batch, seed=1, size=BOARD, channels=INPUT_ENCODED_DIMS):
    rng = np.random.default_rng(seed)
    return (rng.random((batch, channels, size, size)) > 0.9).astype(np.float32)


@pytest.fixture(scope="module")
def model():
    return HiveModel(seed=7)


def test_output_shapes(model):
    value, policy = model.value_policy(_inputs(2))
    assert value.shape == (2, 1)
    assert policy.shape == (2, OUTPUT_LENGTH)


def test_value_in_open_interval(model):
    value, _ = model.value_policy(_inputs(3, seed=4))
    assert value.shape == (3, 1)
    assert float(value.min()) > -0.5
    assert float(value.max()) < 0.5


def test_policy_matches_value_policy(model):
    states = _inputs(2, seed=5)
    _, policy_a = model.value_policy(states)
    policy_b = model.policy(states)
    assert np.allclose(policy_a, policy_b)


def test_same_seed_gives_same_outputs():
    states = _inputs(1, seed=9)
    a = HiveModel(seed=3).policy(states)
    b = HiveModel(seed=3).policy(states)
    assert np.array_equal(a, b)


def test_different_seeds_give_different_outputs():
    states = _inputs(1, seed=9)
    a = HiveModel(seed=3).policy(states)
    b = HiveModel(seed=4).policy(states)
    assert a.shape == b.shape
    assert not np.allclose(a, b)


def test_eval_mode_is_batch_independent(model):
    states = _inputs(3, seed=11)
    batched = model.policy(states)
    single = model.policy(states[1:2])
    assert np.allclose(batched[1], single[0], atol=1e-4)


def test_training_pass_updates_running_statistics():
    m = HiveModel(seed=2)
    states = _inputs(4, seed=12)
    before = m.policy(states)
    m.set_train_mode(True)
    assert m.train_mode is True
    m.value_policy(states)
    m.set_train_mode(False)
    after = m.policy(states)
    assert after.shape == before.shape
    assert not np.allclose(before, after)


def test_wrong_channel_count_rejected(model):
    with pytest.raises(ValueError):
        model.policy(_inputs(1, channels=INPUT_ENCODED_DIMS - 1))


def test_wrong_board_size_rejected(model):
    with pytest.raises(ValueError):
        model.policy(_inputs(1, size=20))


def test_unbatched_input_rejected(model):
    with pytest.raises(ValueError):
        model.policy(_inputs(1)[0])