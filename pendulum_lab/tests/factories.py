"""
Builders and checks shared by the pendulum_lab tests.
"""
from pendulum_lab.networks import GraphAgent, zero_pendulum_agent


def constant_agent(speed_bias: float) -> GraphAgent:
    """Pendulum agent whose only output is always ``speed_bias``."""
    agent = zero_pendulum_agent()
    agent.nodes[-1].bias = speed_bias
    return agent


def assert_graph_invariants(agent: GraphAgent) -> None:
    """Check the arity and acyclicity invariants of a graph agent."""
    assert agent.node_count >= agent.num_inputs + agent.num_outputs
    assert agent.node_count <= max(agent.max_nodes, agent.num_inputs + agent.num_outputs)
    for edge in agent.edges:
        assert edge.target >= agent.num_inputs
        assert edge.source < agent.output_start
        assert edge.source != edge.target
    order = agent.topological_order()
    assert sorted(order) == list(range(agent.node_count))
    position = {index: i for i, index in enumerate(order)}
    for edge in agent.edges:
        assert position[edge.source] < position[edge.target]
