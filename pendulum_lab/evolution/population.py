"""
Evolution engine for pendulum controllers.

Handles one generation at a time:
- Evaluation: every agent is rolled out in parallel
- Ranking: (score, agent) pairs are sorted ascending by score
- Elitism: the top scorers are carried over unmodified
- Reproduction: remaining slots are filled with mutated clones of
  fitness-proportionately sampled parents

Best-ever tracking is left to the orchestrator; the engine only
reports each generation's ranking.
"""
import functools
import logging
import multiprocessing
import random
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from ..config import EvolutionConfig, MutationConfig, PhysicsConfig
from ..evaluation import run_simulation
from ..networks import GraphAgent, new_pendulum_agent
from .mutations import GraphMutator
from .selection import EliteSelection, FitnessProportionateSelection, Individual, rank


logger = logging.getLogger(__name__)

# Workers are started from the orchestrator thread; fork would copy its locks
PROCESS_START_METHOD = 'spawn'


FitnessFunction = Callable[[GraphAgent], float]


@dataclass
class GenerationStats:
    """Statistics for a generation."""
    generation: int = 0
    best_score: float = 0.0
    avg_score: float = 0.0
    min_score: float = 0.0
    score_std: float = 0.0
    mean_nodes: float = 0.0
    mean_edges: float = 0.0
    elapsed: float = 0.0

    @classmethod
    def from_ranked(
        cls,
        generation: int,
        ranked: List[Individual],
        elapsed: float = 0.0,
    ) -> 'GenerationStats':
        scores = np.array([ind.score for ind in ranked], dtype=np.float64)
        nodes = np.array([ind.agent.node_count for ind in ranked], dtype=np.float64)
        edges = np.array([ind.agent.edge_count for ind in ranked], dtype=np.float64)
        return cls(
            generation=generation,
            best_score=float(scores.max()),
            avg_score=float(scores.mean()),
            min_score=float(scores.min()),
            score_std=float(scores.std()),
            mean_nodes=float(nodes.mean()),
            mean_edges=float(edges.mean()),
            elapsed=elapsed,
        )


class EvolutionEngine:
    """
    Evaluate-select-mutate loop over a fixed-size population.

    Fitness evaluation is embarrassingly parallel: each agent gets its
    own environment inside its own task. With the default process
    executor the fitness function and agents must be picklable.

    Attributes:
        config: Evolution configuration.
        generation: Number of generations stepped so far.
        stats_history: One GenerationStats per evaluated generation.

    Example:
        with EvolutionEngine(EvolutionConfig(max_workers=4)) as engine:
            agents = engine.initial_population()
            for _ in range(100):
                ranked, agents = engine.step(agents)
                print(f"Gen {engine.generation}: best={ranked[-1].score:.3f}")
    """

    def __init__(
        self,
        config: Optional[EvolutionConfig] = None,
        fitness_function: Optional[FitnessFunction] = None,
        mutation_config: Optional[MutationConfig] = None,
        physics: Optional[PhysicsConfig] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Evolution configuration.
            fitness_function: Maps an agent to a non-negative score.
                              Defaults to a pendulum rollout.
            mutation_config: Mutation probabilities.
            physics: Physical constants for the default rollout.
        """
        self.config = config or EvolutionConfig()
        self.rng = random.Random(self.config.seed)

        self.mutator = GraphMutator(mutation_config, self.rng)
        self.selection = FitnessProportionateSelection(self.rng)
        self.elite_selection = EliteSelection(self.config.elite_count)

        self.fitness_function = fitness_function or functools.partial(
            run_simulation,
            ticks=self.config.ticks,
            dt=self.config.tick_duration,
            physics=physics,
        )

        self.generation = 0
        self.stats_history: List[GenerationStats] = []
        self._executor: Optional[Executor] = None

    def initial_population(self) -> List[GraphAgent]:
        """Create N fresh edgeless agents with random biases."""
        return [
            new_pendulum_agent(max_nodes=self.config.max_nodes, rng=self.rng)
            for _ in range(self.config.population_size)
        ]

    # Evaluation

    def _get_executor(self) -> Optional[Executor]:
        if self.config.max_workers == 1:
            return None
        if self._executor is None:
            if self.config.executor == 'thread':
                self._executor = ThreadPoolExecutor(max_workers=self.config.max_workers)
            else:
                self._executor = ProcessPoolExecutor(
                    max_workers=self.config.max_workers,
                    mp_context=multiprocessing.get_context(PROCESS_START_METHOD),
                )
        return self._executor

    def evaluate_all(self, agents: List[GraphAgent]) -> List[Individual]:
        """
        Score every agent.

        Args:
            agents: The current population.

        Returns:
            Individuals sorted ascending by score.
        """
        executor = self._get_executor()
        if executor is None:
            scores = [self.fitness_function(agent) for agent in agents]
        else:
            scores = list(executor.map(self.fitness_function, agents))

        return rank([
            Individual(score=float(score), agent=agent, generation=self.generation)
            for score, agent in zip(scores, agents)
        ])

    # Reproduction

    def next_generation(self, ranked: List[Individual]) -> List[GraphAgent]:
        """
        Build the next population from a ranked one.

        Elites come first and are the very same agents. The rest are
        mutated clones of parents drawn from the whole ranked
        population, elites included.

        Args:
            ranked: Individuals sorted ascending by score.

        Returns:
            Exactly ``population_size`` agents.
        """
        elite = self.elite_selection.get_elite(ranked)
        agents = [ind.agent for ind in elite]

        parents = self.selection.select(ranked, self.config.population_size - len(agents))
        for parent in parents:
            child = parent.agent.clone()
            self.mutator.mutate(child)
            agents.append(child)

        return agents

    def step(self, agents: List[GraphAgent]) -> Tuple[List[Individual], List[GraphAgent]]:
        """
        Run one generation.

        Returns:
            Tuple of (this generation's ranking, next population).
        """
        start = time.perf_counter()
        ranked = self.evaluate_all(agents)
        stats = GenerationStats.from_ranked(
            self.generation, ranked, elapsed=time.perf_counter() - start
        )
        self.stats_history.append(stats)
        logger.debug(
            f"Generation {stats.generation}: best={stats.best_score:.3f} "
            f"avg={stats.avg_score:.3f} nodes={stats.mean_nodes:.1f} "
            f"edges={stats.mean_edges:.1f} ({stats.elapsed:.2f}s)"
        )

        next_agents = self.next_generation(ranked)
        self.generation += 1
        return ranked, next_agents

    # Resources

    def close(self) -> None:
        """Shut down the worker pool, if one was started."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> 'EvolutionEngine':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
