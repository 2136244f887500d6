"""
Tests for pendulum fitness evaluation.
"""
import math

import pytest

from pendulum_lab.evaluation import (
    DEFAULT_DT,
    DEFAULT_TICKS,
    observe,
    run_simulation,
    set_pendulum_inputs,
    speed_to_direction,
    tick_score,
)
from pendulum_lab.networks import new_pendulum_agent
from pendulum_lab.physics import Direction, PendulumEnvironment, PendulumState


class TestControl:
    """Tests for observation and the control decision."""

    def test_observe_at_rest(self):
        """Inputs at rest are cart x, bob x, bob y and angular velocity."""
        inputs = observe(PendulumEnvironment())

        assert inputs.cart_x == 0.0
        assert inputs.bob_x == pytest.approx(0.0)
        assert inputs.bob_y == pytest.approx(-0.3)
        assert inputs.angvel == 0.0

    @pytest.mark.parametrize('speed,expected', [
        (0.5, Direction.RIGHT),
        (0.1001, Direction.RIGHT),
        (0.1, Direction.STOP),
        (0.0, Direction.STOP),
        (-0.1, Direction.STOP),
        (-0.1001, Direction.LEFT),
        (-3.0, Direction.LEFT),
    ])
    def test_dead_zone(self, speed, expected):
        """Speeds inside [-0.1, 0.1] stop the cart."""
        assert speed_to_direction(speed) == expected

    def test_zero_agent_stops(self, zero_agent):
        """A zero-output agent commands STOP."""
        env = PendulumEnvironment()

        assert set_pendulum_inputs(env, zero_agent) == Direction.STOP
        assert env.state.cart_linear_acceleration == 0.0

    def test_agent_command_is_applied(self, right_agent):
        """The chosen command sets the cart acceleration."""
        env = PendulumEnvironment()

        assert set_pendulum_inputs(env, right_agent) == Direction.RIGHT
        assert env.state.cart_linear_acceleration > 0


class TestTickScore:
    """Tests for the per-tick score."""

    def test_hanging_scores_zero(self):
        """A hanging pendulum earns nothing."""
        assert tick_score(PendulumEnvironment()) == 0.0

    def test_upright_scores_one(self):
        """A still, centred, upright pendulum earns about 1 per tick."""
        env = PendulumEnvironment(state=PendulumState(bob_angle=math.pi))

        assert tick_score(env) == pytest.approx(1.0)

    def test_below_threshold_scores_zero(self):
        """Heights at or below 0.9 earn nothing."""
        angle = math.pi - math.acos(0.85)
        env = PendulumEnvironment(state=PendulumState(bob_angle=angle))

        assert tick_score(env) == 0.0

    def test_wobble_is_penalized(self):
        """Angular velocity divides the score by 1 + 4|angvel|."""
        env = PendulumEnvironment(
            state=PendulumState(bob_angle=math.pi, bob_angular_velocity=-0.25)
        )

        assert tick_score(env) == pytest.approx(0.5)

    def test_drift_is_penalized(self):
        """Cart offset divides the score by 1 + |x|."""
        env = PendulumEnvironment(
            state=PendulumState(bob_angle=math.pi, cart_position=0.5)
        )

        assert tick_score(env) == pytest.approx(1.0 / 1.5)


class TestRunSimulation:
    """Tests for full rollouts."""

    def test_defaults(self):
        """Default rollouts are 100 seconds at 30 Hz."""
        assert DEFAULT_TICKS == 3000
        assert DEFAULT_DT == pytest.approx(1.0 / 30)

    def test_zero_agent_scores_zero(self, zero_agent):
        """A do-nothing agent never lifts the bob."""
        assert run_simulation(zero_agent) == 0.0

    def test_zero_agent_cart_stays_centred(self, zero_agent):
        """A do-nothing agent never moves the cart."""
        env = PendulumEnvironment()

        for _ in range(1000):
            set_pendulum_inputs(env, zero_agent)
            env.step(DEFAULT_DT)

        assert env.cart_x() == 0.0

    def test_right_agent_ends_at_track_edge(self, right_agent):
        """An always-right agent pins the cart to the right end."""
        env = PendulumEnvironment()

        for _ in range(300):
            set_pendulum_inputs(env, right_agent)
            env.step(DEFAULT_DT)

        assert env.cart_x() == pytest.approx(0.5)

    def test_deterministic(self, small_graph):
        """Rolling out the same agent twice gives the same score."""
        first = run_simulation(small_graph, ticks=600)
        second = run_simulation(small_graph, ticks=600)

        assert first == second

    def test_zero_ticks(self, right_agent):
        """A rollout with no ticks scores zero."""
        assert run_simulation(right_agent, ticks=0) == 0.0

    def test_score_is_non_negative(self, rng):
        """Scores are never negative."""
        for _ in range(5):
            agent = new_pendulum_agent(rng=rng)
            for source in range(4):
                agent.add_edge(source, 4, rng.uniform(-1.0, 1.0))
            assert run_simulation(agent, ticks=300) >= 0.0
