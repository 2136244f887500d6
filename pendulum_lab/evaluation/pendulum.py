"""
Fitness evaluation of pendulum controllers.

A rollout drives a fresh PendulumEnvironment with an agent for a fixed
number of ticks and accumulates a score while the bob is held near the
top. The per-tick control decision is shared with the live controller.
"""
from typing import Optional

from ..config import SIMULATION_SECONDS, TICKS_PER_SECOND, PhysicsConfig
from ..networks import GraphAgent, PendulumInputs, choose
from ..physics import Direction, PendulumEnvironment


DEFAULT_TICKS = TICKS_PER_SECOND * SIMULATION_SECONDS
DEFAULT_DT = 1.0 / TICKS_PER_SECOND

# Speeds within +/- DEAD_ZONE stop the cart
DEAD_ZONE = 0.1

# Normalized bob height above which a tick is scored
BALANCE_HEIGHT = 0.9


def observe(environment: PendulumEnvironment) -> PendulumInputs:
    """Read the agent's input vector from the environment."""
    bob_x, bob_y = environment.bob_position()
    return PendulumInputs(
        cart_x=environment.cart_x(),
        bob_x=bob_x,
        bob_y=bob_y,
        angvel=environment.angvel(),
    )


def speed_to_direction(speed: float) -> Direction:
    if speed > DEAD_ZONE:
        return Direction.RIGHT
    if speed < -DEAD_ZONE:
        return Direction.LEFT
    return Direction.STOP


def set_pendulum_inputs(environment: PendulumEnvironment, agent: GraphAgent) -> Direction:
    """
    Let the agent pick the cart command for the current tick.

    Args:
        environment: Environment to observe and command.
        agent: Controller to evaluate.

    Returns:
        The command that was issued.
    """
    outputs = choose(agent, observe(environment))
    direction = speed_to_direction(outputs.speed)
    environment.command(direction)
    return direction


def tick_score(environment: PendulumEnvironment) -> float:
    """
    Score contribution of the current state.

    Rewards a near-vertical bob, penalizing wobble and cart drift.
    """
    _, height = environment.bob_position_normalized()
    if height <= BALANCE_HEIGHT:
        return 0.0
    return height / (1.0 + 4.0 * abs(environment.angvel())) / (1.0 + abs(environment.cart_x()))


def run_simulation(
    agent: GraphAgent,
    ticks: int = DEFAULT_TICKS,
    dt: float = DEFAULT_DT,
    physics: Optional[PhysicsConfig] = None,
) -> float:
    """
    Roll out an agent and return its fitness.

    Deterministic for a given agent: there is no randomness on this path.

    Args:
        agent: Controller with pendulum arity.
        ticks: Number of control ticks (default 100 s at 30 Hz).
        dt: Simulated seconds per tick.
        physics: Physical constants for the fresh environment.

    Returns:
        The accumulated score (non-negative).
    """
    environment = PendulumEnvironment(physics)
    score = 0.0
    for _ in range(ticks):
        set_pendulum_inputs(environment, agent)
        environment.step(dt)
        score += tick_score(environment)
    return score
