"""
Input/output arity of pendulum controllers.

The set of controller shapes is closed: pendulum agents read four
observables and produce a single speed value.
"""
import random
from typing import NamedTuple, Optional, Sequence

from .graph import DEFAULT_MAX_NODES, GraphAgent


class PendulumInputs(NamedTuple):
    """Observables fed to a pendulum agent, in input-node order."""
    cart_x: float
    bob_x: float
    bob_y: float
    angvel: float


class PendulumOutputs(NamedTuple):
    """Decoded agent outputs, in output-node order."""
    speed: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> 'PendulumOutputs':
        if len(values) != OUTPUT_COUNT:
            raise ValueError(f"Expected {OUTPUT_COUNT} outputs, got {len(values)}")
        return cls(*(float(v) for v in values))


INPUT_COUNT = len(PendulumInputs._fields)
OUTPUT_COUNT = len(PendulumOutputs._fields)


def new_pendulum_agent(
    max_nodes: int = DEFAULT_MAX_NODES,
    rng: Optional[random.Random] = None,
) -> GraphAgent:
    """Create a fresh random-bias agent with pendulum arity."""
    return GraphAgent.random(INPUT_COUNT, OUTPUT_COUNT, max_nodes=max_nodes, rng=rng)


def zero_pendulum_agent(max_nodes: int = DEFAULT_MAX_NODES) -> GraphAgent:
    """Create an edgeless agent with all biases at zero."""
    return GraphAgent(INPUT_COUNT, OUTPUT_COUNT, max_nodes=max_nodes)


def choose(agent: GraphAgent, inputs: PendulumInputs) -> PendulumOutputs:
    """Evaluate an agent on pendulum observables."""
    return PendulumOutputs.from_values(agent.evaluate(inputs))
