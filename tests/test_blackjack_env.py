import numpy as np

from blackjack_env.env import HIT, NUM_STATES, STICK, BlackjackEnvironment, State
from blackjack_env.utils import card_value, draw_card, play_dealer
from mces.rl.environment import make_rng
from mces.rl.training import generate_episode


class ScriptedRng:
    """Replays fixed draws in place of a numpy Generator."""

    def __init__(self, integers=(), uniforms=()):
        self._integers = list(integers)
        self._uniforms = list(uniforms)

    def integers(self, low, high):
        value = self._integers.pop(0)
        assert low <= value < high
        return value

    def random(self):
        return self._uniforms.pop(0)


def test_draw_card_clamps_to_ten():
    assert draw_card(ScriptedRng([-3])) == 0
    assert draw_card(ScriptedRng([0])) == 0
    assert draw_card(ScriptedRng([1])) == 1
    assert draw_card(ScriptedRng([9])) == 9
    assert card_value(0) == 10
    assert card_value(1) == 1


def test_draw_card_distribution_favours_tens():
    rng = make_rng(0)
    draws = np.array([draw_card(rng) for _ in range(13_000)])
    assert set(np.unique(draws)) == set(range(10))
    assert abs(np.mean(draws == 0) - 4 / 13) < 0.02


def test_dealer_stands_on_seventeen():
    # 10 then 7
    assert play_dealer(0, ScriptedRng([7])) == 17


def test_dealer_soft_ace_is_demoted():
    # A, 5 (soft 16), ten (hard 16), A -> 17
    assert play_dealer(1, ScriptedRng([5, -3, 1])) == 17


def test_dealer_can_bust():
    assert play_dealer(6, ScriptedRng([-1, 9])) == 25


def test_sample_start_covers_decision_states():
    env = BlackjackEnvironment()
    state, action = env.sample_start(ScriptedRng([15, 4], [0.2, 0.7]))
    assert state == State(15, 4, True)
    assert action is STICK


def test_hit_continues_below_twenty_one():
    env = BlackjackEnvironment()
    next_state, reward = env.step((State(13, 2, False), HIT), ScriptedRng([5]))
    assert next_state == State(18, 2, False)
    assert reward == 0


def test_hit_busts_without_usable_ace():
    env = BlackjackEnvironment()
    next_state, reward = env.step((State(20, 0, False), HIT), ScriptedRng([5]))
    assert next_state is None
    assert reward == -1


def test_hit_over_twenty_one_demotes_usable_ace():
    env = BlackjackEnvironment()
    next_state, reward = env.step((State(20, 3, True), HIT), ScriptedRng([-1]))
    assert next_state == State(20, 3, False)
    assert reward == 0


def test_hit_to_twenty_one_stands_automatically():
    env = BlackjackEnvironment()
    # player draws 5 -> 21; dealer 10 + 7
    next_state, reward = env.step((State(16, 0, False), HIT), ScriptedRng([5, 7]))
    assert next_state is None
    assert reward == 1


def test_stick_outcomes():
    env = BlackjackEnvironment()
    assert env.step((State(12, 6, False), STICK), ScriptedRng([-1, 9])) == (None, 1)
    assert env.step((State(18, 0, False), STICK), ScriptedRng([8])) == (None, 0)
    assert env.step((State(15, 0, True), STICK), ScriptedRng([7])) == (None, -1)


def test_state_indices_are_unique():
    indices = {
        State(total, dealer_card, usable_ace).index
        for total in range(12, 21)
        for dealer_card in range(10)
        for usable_ace in (False, True)
    }
    assert indices == set(range(NUM_STATES))


def test_random_episodes_stay_in_decision_states():
    env = BlackjackEnvironment()
    rng = make_rng(123)
    for _ in range(500):
        episode = generate_episode(env, {}, rng)
        assert episode[-1].reward in (-1, 0, 1)
        assert all(step.reward == 0 for step in episode[:-1])
        for step in episode:
            assert 12 <= step.state.sum <= 20
            assert 0 <= step.state.dealer_card <= 9
