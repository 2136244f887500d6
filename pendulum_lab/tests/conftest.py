"""
Pytest fixtures for pendulum_lab tests.

Provides fixtures for:
- Hand-built graph agents with known parameters
- Constant-output pendulum agents
"""
import pytest

from pendulum_lab.networks import Edge, GraphAgent, Node, zero_pendulum_agent

from .factories import constant_agent


@pytest.fixture
def zero_agent() -> GraphAgent:
    """Return an edgeless pendulum agent with all biases at zero."""
    return zero_pendulum_agent()


@pytest.fixture
def small_graph() -> GraphAgent:
    """
    Return a 4-input, 1-output graph with one hidden node.

    Layout: inputs 0-3, hidden 4, output 5.
    """
    nodes = [
        Node(bias=0.1),
        Node(bias=0.0),
        Node(bias=0.0),
        Node(bias=0.0),
        Node(bias=0.2),
        Node(bias=-0.1),
    ]
    edges = [
        Edge(source=0, target=4, weight=0.5),
        Edge(source=1, target=4, weight=-1.0),
        Edge(source=4, target=5, weight=2.0),
        Edge(source=2, target=5, weight=0.3),
    ]
    return GraphAgent(4, 1, nodes=nodes, edges=edges)


@pytest.fixture
def right_agent() -> GraphAgent:
    """Return an agent that always pushes the cart right."""
    return constant_agent(1.0)

