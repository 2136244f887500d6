"""
Directed acyclic computation graph used as an evolvable controller.

Nodes and edges live in flat, index-addressed lists; an edge is a
``(source, target, weight)`` triple. Input nodes occupy indices
``[0, num_inputs)``, output nodes the last ``num_outputs`` indices and
hidden nodes, created only by edge splits, sit between the two blocks.

The acyclicity invariant is kept by construction:
- edges never end at an input node and never start at an output node
- splitting an edge places the new node strictly between its endpoints
- a new connection is refused when the target already reaches the source

Evaluation visits nodes in topological order. Input activations are
``input + bias``; all other activations are ``tanh(accumulated) + bias``.
Each activation is pushed along outgoing edges multiplied by the weight.
"""
import graphlib
import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np


DEFAULT_MAX_NODES = 30


@dataclass
class Node:
    """A computational unit. ``value`` is scratch space for evaluation."""
    bias: float
    value: float = field(default=0.0, compare=False, repr=False)

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> 'Node':
        rng = rng or random
        return cls(bias=rng.uniform(-1.0, 1.0))


@dataclass
class Edge:
    """A weighted directed connection between two node indices."""
    source: int
    target: int
    weight: float

    @classmethod
    def random(
        cls,
        source: int,
        target: int,
        rng: Optional[random.Random] = None,
    ) -> 'Edge':
        rng = rng or random
        return cls(source=source, target=target, weight=rng.uniform(-1.0, 1.0))


class GraphAgent:
    """
    One controller's "brain": an acyclic graph of biased tanh units.

    Attributes:
        num_inputs: Number of input nodes (I).
        num_outputs: Number of output nodes (O).
        max_nodes: Node count above which edge splits are refused.
        nodes: Node list, index-addressed.
        edges: Edge list.

    Example:
        agent = GraphAgent.random(num_inputs=4, num_outputs=1)
        agent.add_edge(0, 4, 0.5)
        outputs = agent.evaluate([0.0, 0.1, -0.3, 0.0])
    """

    def __init__(
        self,
        num_inputs: int,
        num_outputs: int,
        nodes: Optional[List[Node]] = None,
        edges: Optional[List[Edge]] = None,
        max_nodes: int = DEFAULT_MAX_NODES,
    ):
        """
        Initialize a graph agent.

        Args:
            num_inputs: Number of input nodes.
            num_outputs: Number of output nodes.
            nodes: Initial nodes. Defaults to I + O zero-bias nodes.
            edges: Initial edges. Defaults to none.
            max_nodes: Cap on node count for structural growth.

        Raises:
            ValueError: If the arity or the given nodes/edges are invalid.
        """
        if num_inputs < 1 or num_outputs < 1:
            raise ValueError(
                f"Agents need at least one input and one output, "
                f"got {num_inputs} inputs and {num_outputs} outputs"
            )
        self.num_inputs = num_inputs
        self.num_outputs = num_outputs
        self.max_nodes = max_nodes
        if nodes is None:
            nodes = [Node(bias=0.0) for _ in range(num_inputs + num_outputs)]
        self.nodes = [Node(bias=n.bias) for n in nodes]
        self.edges = [Edge(e.source, e.target, e.weight) for e in edges or []]
        if len(self.nodes) < num_inputs + num_outputs:
            raise ValueError(
                f"Need at least {num_inputs + num_outputs} nodes, got {len(self.nodes)}"
            )
        for edge in self.edges:
            if not self._is_valid_endpoint_pair(edge.source, edge.target):
                raise ValueError(f"Invalid edge {edge.source} -> {edge.target}")
        self._plan: Optional[Tuple[List[int], List[List[Edge]]]] = None

    @classmethod
    def random(
        cls,
        num_inputs: int,
        num_outputs: int,
        max_nodes: int = DEFAULT_MAX_NODES,
        rng: Optional[random.Random] = None,
    ) -> 'GraphAgent':
        """Create an edgeless agent with uniformly random biases in [-1, 1]."""
        nodes = [Node.random(rng) for _ in range(num_inputs + num_outputs)]
        return cls(num_inputs, num_outputs, nodes=nodes, max_nodes=max_nodes)

    # Topology queries

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def output_start(self) -> int:
        """Index of the first output node."""
        return len(self.nodes) - self.num_outputs

    def is_input(self, index: int) -> bool:
        return 0 <= index < self.num_inputs

    def is_output(self, index: int) -> bool:
        return self.output_start <= index < len(self.nodes)

    def has_edge(self, source: int, target: int) -> bool:
        return any(e.source == source and e.target == target for e in self.edges)

    def reaches(self, start: int, goal: int) -> bool:
        """Whether a directed path leads from start to goal."""
        children = self._children()
        stack = [start]
        seen = {start}
        while stack:
            index = stack.pop()
            if index == goal:
                return True
            for edge in children[index]:
                if edge.target not in seen:
                    seen.add(edge.target)
                    stack.append(edge.target)
        return False

    def can_connect(self, source: int, target: int) -> bool:
        """
        Whether ``source -> target`` may be added as a new edge.

        Refuses self-loops, edges into inputs, edges out of outputs,
        duplicates and anything that would close a cycle.
        """
        if not self._is_valid_endpoint_pair(source, target):
            return False
        if self.has_edge(source, target):
            return False
        return not self.reaches(target, source)

    def _is_valid_endpoint_pair(self, source: int, target: int) -> bool:
        count = len(self.nodes)
        if not (0 <= source < count and 0 <= target < count):
            return False
        return source != target and not self.is_output(source) and not self.is_input(target)

    # Structural edits

    def add_edge(self, source: int, target: int, weight: float) -> bool:
        """
        Add an edge if the connection is allowed.

        Returns:
            True if the edge was added, False if it was skipped.
        """
        if not self.can_connect(source, target):
            return False
        self.edges.append(Edge(source=source, target=target, weight=weight))
        self._plan = None
        return True

    def split_edge(self, edge_index: int, node: Optional[Node] = None) -> int:
        """
        Replace an edge with a new hidden node in its place.

        The source keeps the removed edge's weight into the new node,
        and the new node feeds the original target with weight 1.0.
        The node is inserted just before the output block, so outputs
        stay the last ``num_outputs`` indices.

        Args:
            edge_index: Index into ``edges`` of the edge to split.
            node: The node to insert. Defaults to a random-bias node.

        Returns:
            Index of the new hidden node.
        """
        removed = self.edges.pop(edge_index)
        position = self.output_start
        for edge in self.edges:
            if edge.source >= position:
                edge.source += 1
            if edge.target >= position:
                edge.target += 1
        target = removed.target + 1 if removed.target >= position else removed.target

        self.nodes.insert(position, node if node is not None else Node.random())
        self.edges.append(Edge(source=removed.source, target=position, weight=removed.weight))
        self.edges.append(Edge(source=position, target=target, weight=1.0))
        self._plan = None
        return position

    # Evaluation

    def topological_order(self) -> List[int]:
        """
        Node indices in topological order.

        Raises:
            graphlib.CycleError: If the acyclicity invariant is broken.
        """
        sorter = graphlib.TopologicalSorter()
        for index in range(len(self.nodes)):
            sorter.add(index)
        for edge in self.edges:
            sorter.add(edge.target, edge.source)
        return list(sorter.static_order())

    def _children(self) -> List[List[Edge]]:
        children: List[List[Edge]] = [[] for _ in self.nodes]
        for edge in self.edges:
            children[edge.source].append(edge)
        return children

    def _compile(self) -> Tuple[List[int], List[List[Edge]]]:
        if self._plan is None:
            self._plan = (self.topological_order(), self._children())
        return self._plan

    def evaluate(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Run a forward pass.

        Args:
            inputs: Exactly ``num_inputs`` values.

        Returns:
            Array of the ``num_outputs`` output activations, in index order.

        Raises:
            ValueError: If the number of inputs does not match.
        """
        values = np.asarray(inputs, dtype=np.float64)
        if values.shape != (self.num_inputs,):
            raise ValueError(
                f"Expected {self.num_inputs} inputs, got shape {values.shape}"
            )
        inputs_list = values.tolist()

        for node in self.nodes:
            node.value = 0.0

        order, children = self._compile()
        nodes = self.nodes
        activations = [0.0] * len(nodes)
        for index in order:
            node = nodes[index]
            if index < self.num_inputs:
                activation = inputs_list[index] + node.bias
            else:
                activation = math.tanh(node.value) + node.bias
            activations[index] = activation
            for edge in children[index]:
                nodes[edge.target].value += activation * edge.weight

        return np.array(activations[self.output_start:], dtype=np.float64)

    # Copying and comparison

    def clone(self) -> 'GraphAgent':
        """Deep copy of nodes and edges."""
        return GraphAgent(
            self.num_inputs,
            self.num_outputs,
            nodes=self.nodes,
            edges=self.edges,
            max_nodes=self.max_nodes,
        )

    def mutate(self, mutator: Optional[Any] = None) -> List[str]:
        """
        Mutate in place.

        Args:
            mutator: A GraphMutator. Defaults to one with default rates.

        Returns:
            Names of the mutations applied.
        """
        if mutator is None:
            from ..evolution.mutations import GraphMutator
            mutator = GraphMutator()
        return mutator.mutate(self)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible description of the graph."""
        return {
            'num_inputs': self.num_inputs,
            'num_outputs': self.num_outputs,
            'max_nodes': self.max_nodes,
            'nodes': [{'bias': n.bias} for n in self.nodes],
            'edges': [
                {'source': e.source, 'target': e.target, 'weight': e.weight}
                for e in self.edges
            ],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphAgent):
            return NotImplemented
        return (
            self.num_inputs == other.num_inputs
            and self.num_outputs == other.num_outputs
            and self.nodes == other.nodes
            and self.edges == other.edges
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"GraphAgent(inputs={self.num_inputs}, outputs={self.num_outputs}, "
            f"nodes={self.node_count}, edges={self.edge_count})"
        )
