"""
Graph-structured networks for evolved controllers.

This module provides:
- GraphAgent: index-addressed acyclic computation graph
- Node / Edge: the graph's arena elements
- Pendulum arity: input/output vectors and agent factories
"""
from .graph import DEFAULT_MAX_NODES, Edge, GraphAgent, Node
from .pendulum import (
    INPUT_COUNT,
    OUTPUT_COUNT,
    PendulumInputs,
    PendulumOutputs,
    choose,
    new_pendulum_agent,
    zero_pendulum_agent,
)

__all__ = [
    # Graph
    'DEFAULT_MAX_NODES',
    'Edge',
    'GraphAgent',
    'Node',

    # Pendulum arity
    'INPUT_COUNT',
    'OUTPUT_COUNT',
    'PendulumInputs',
    'PendulumOutputs',
    'choose',
    'new_pendulum_agent',
    'zero_pendulum_agent',
]
