"""
Selection strategies for the evolution engine.

- Elite: the top scorers survive unmodified
- Fitness-proportionate (roulette wheel): parents are sampled with
  probability proportional to raw score, falling back to uniform
  sampling while every score is zero

All strategies work on Individual (score, agent) pairs.
"""
import logging
import random
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from ..networks import GraphAgent


logger = logging.getLogger(__name__)


@dataclass
class Individual:
    """A scored agent."""
    score: float
    agent: GraphAgent
    generation: int = 0
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])


def rank(individuals: List[Individual]) -> List[Individual]:
    """Sort ascending by score; ties keep their original order."""
    return sorted(individuals, key=lambda ind: ind.score)


class EliteSelection:
    """
    Elitism: preserve the best individuals unchanged.

    The elite bypass mutation and go directly to the next generation.
    """

    def __init__(self, elite_count: int = 3):
        """
        Args:
            elite_count: Number of elite individuals to preserve.
        """
        self.elite_count = elite_count

    def get_elite(self, population: List[Individual]) -> List[Individual]:
        """
        Get the elite individuals, best first.

        Args:
            population: Scored individuals in any order.
        """
        if not population or self.elite_count <= 0:
            return []
        return list(reversed(rank(population)))[:self.elite_count]


class FitnessProportionateSelection:
    """
    Roulette-wheel selection on raw scores.

    Scores are used directly as sampling weights, so they must be
    non-negative. When they are all zero the wheel is undefined and
    parents are drawn uniformly instead.

    Example:
        selection = FitnessProportionateSelection(rng=random.Random(0))
        parents = selection.select(population, num_to_select=7)
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def select(
        self,
        population: List[Individual],
        num_to_select: int,
    ) -> List[Individual]:
        """
        Sample individuals with replacement.

        Args:
            population: Scored individuals.
            num_to_select: Number to draw.

        Returns:
            Selected individuals (may contain repeats).
        """
        if not population or num_to_select <= 0:
            return []

        weights = [ind.score for ind in population]
        try:
            return self.rng.choices(population, weights=weights, k=num_to_select)
        except ValueError:
            logger.debug("All scores are zero, sampling parents uniformly")
            return self.rng.choices(population, k=num_to_select)
