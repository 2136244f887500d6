"""
Neuroevolution of graph-structured pendulum controllers.

This module provides:
- Mutation operators (parameter perturbation and topology growth)
- Selection strategies (elitism, fitness-proportionate)
- The evolution engine that runs one generation at a time

Example usage:
    from pendulum_lab.config import EvolutionConfig
    from pendulum_lab.evolution import EvolutionEngine

    with EvolutionEngine(EvolutionConfig(population_size=10)) as engine:
        agents = engine.initial_population()
        for gen in range(100):
            ranked, agents = engine.step(agents)
            print(f"Gen {gen}: best={ranked[-1].score:.3f}")
"""
from .mutations import (
    GraphMutator,
    ParameterMutator,
    TopologyMutator,
)
from .selection import (
    EliteSelection,
    FitnessProportionateSelection,
    Individual,
    rank,
)
from .population import (
    EvolutionEngine,
    GenerationStats,
)

__all__ = [
    # Mutations
    'GraphMutator',
    'ParameterMutator',
    'TopologyMutator',

    # Selection
    'EliteSelection',
    'FitnessProportionateSelection',
    'Individual',
    'rank',

    # Engine
    'EvolutionEngine',
    'GenerationStats',
]
