"""
Graph mutation operators for neuroevolution.

Implements two types of mutations:
1. Parameter perturbation: resample or nudge edge weights and node biases
2. Topology growth (NEAT-style): split edges and add connections

Both operate in place on a GraphAgent; offspring are produced by
cloning a parent first.

Reference:
    Stanley, K. O., & Miikkulainen, R. (2002).
    Evolving neural networks through augmenting topologies.
    Evolutionary computation, 10(2), 99-127.
"""
import random
from typing import List, Optional

from ..config import MutationConfig
from ..networks import Edge, GraphAgent, Node


class ParameterMutator:
    """
    Weight and bias perturbation operator.

    Each edge weight and each node bias is independently selected with
    probability ``parameter_rate``. A selected value is then:
    - resampled uniformly in [-1, 1] with probability ``reset_rate``
    - otherwise nudged by a uniform delta in [-large_delta, large_delta]
      with probability ``large_perturbation_rate``
    - otherwise nudged by a uniform delta in [-small_delta, small_delta]

    Example:
        mutator = ParameterMutator(MutationConfig(parameter_rate=1.0))
        mutator.mutate(agent)
    """

    def __init__(
        self,
        config: Optional[MutationConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or MutationConfig()
        self.rng = rng or random.Random()

    def perturb(self, value: float) -> float:
        """Apply the three-way policy to one selected value."""
        cfg = self.config
        rng = self.rng
        if rng.random() < cfg.reset_rate:
            return rng.uniform(-1.0, 1.0)
        if rng.random() < cfg.large_perturbation_rate:
            return value + cfg.large_delta * rng.uniform(-1.0, 1.0)
        return value + cfg.small_delta * rng.uniform(-1.0, 1.0)

    def mutate(self, agent: GraphAgent) -> int:
        """
        Perturb weights and biases in place.

        Returns:
            Number of parameters changed.
        """
        changed = 0
        rate = self.config.parameter_rate
        for edge in agent.edges:
            if self.rng.random() < rate:
                edge.weight = self.perturb(edge.weight)
                changed += 1
        for node in agent.nodes:
            if self.rng.random() < rate:
                node.bias = self.perturb(node.bias)
                changed += 1
        return changed


class TopologyMutator:
    """
    Structural growth operator.

    Key operations:
    - split_edge: replace a random edge with a new hidden node
    - add_connection: connect a random non-output node to a random
      non-input node

    Neither operation can introduce a cycle. Both are no-ops when
    they find nothing to do (no edges to split, node cap reached,
    ineligible or duplicate connection).

    Example:
        mutator = TopologyMutator(MutationConfig(split_edge_rate=1.0))
        applied = mutator.mutate(agent)
    """

    def __init__(
        self,
        config: Optional[MutationConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or MutationConfig()
        self.rng = rng or random.Random()

    def mutate(self, agent: GraphAgent) -> List[str]:
        """
        Apply structural mutations in place.

        Returns:
            Names of the mutations that changed the graph.
        """
        applied = []
        if agent.node_count < agent.max_nodes and self.rng.random() < self.config.split_edge_rate:
            if self.split_edge(agent):
                applied.append('split_edge')
        if self.rng.random() < self.config.add_connection_rate:
            if self.add_connection(agent):
                applied.append('add_connection')
        return applied

    def split_edge(self, agent: GraphAgent) -> bool:
        """Insert a hidden node in place of a uniformly random edge."""
        if agent.edge_count == 0 or agent.node_count >= agent.max_nodes:
            return False
        index = self.rng.randrange(agent.edge_count)
        agent.split_edge(index, Node.random(self.rng))
        return True

    def add_connection(self, agent: GraphAgent) -> bool:
        """Add a random-weight edge between a random eligible pair."""
        source = self.rng.randrange(agent.output_start)
        target = self.rng.randrange(agent.num_inputs, agent.node_count)
        edge = Edge.random(source, target, self.rng)
        return agent.add_edge(edge.source, edge.target, edge.weight)


class GraphMutator:
    """
    Combined parameter and topology mutation.

    This is the ``mutate()`` applied to every non-elite offspring.
    """

    def __init__(
        self,
        config: Optional[MutationConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the combined mutator.

        Args:
            config: Mutation probabilities and step sizes.
            rng: Random source shared by both operators.
        """
        self.config = config or MutationConfig()
        self.rng = rng or random.Random()
        self.parameter_mutator = ParameterMutator(self.config, self.rng)
        self.topology_mutator = TopologyMutator(self.config, self.rng)

    def mutate(self, agent: GraphAgent) -> List[str]:
        """
        Mutate an agent in place.

        Returns:
            Names of the mutations applied.
        """
        applied = []
        if self.parameter_mutator.mutate(agent):
            applied.append('parameters')
        applied.extend(self.topology_mutator.mutate(agent))
        return applied
