"""
Tests for ranking and selection strategies.
"""
import random
from collections import Counter

from pendulum_lab.evolution import (
    EliteSelection,
    FitnessProportionateSelection,
    Individual,
    rank,
)
from pendulum_lab.networks import zero_pendulum_agent


def make_population(scores):
    return [Individual(score=score, agent=zero_pendulum_agent()) for score in scores]


class TestRank:
    """Tests for ranking."""

    def test_sorts_ascending(self):
        """Ranking puts the best individual last."""
        ranked = rank(make_population([3.0, 1.0, 2.0]))

        assert [ind.score for ind in ranked] == [1.0, 2.0, 3.0]

    def test_ties_keep_order(self):
        """Equal scores keep their evaluation order."""
        population = make_population([1.0, 1.0, 0.0])

        ranked = rank(population)

        assert ranked[1] is population[0]
        assert ranked[2] is population[1]

    def test_individual_ids_are_unique(self):
        """Each individual gets its own short id."""
        population = make_population([0.0] * 20)

        assert len({ind.id for ind in population}) == 20
        assert all(len(ind.id) == 8 for ind in population)


class TestEliteSelection:
    """Tests for elitism."""

    def test_returns_best_first(self):
        """Elites are the top scorers, best first."""
        population = make_population([0.5, 4.0, 1.0, 3.0, 2.0])

        elite = EliteSelection(elite_count=3).get_elite(population)

        assert [ind.score for ind in elite] == [4.0, 3.0, 2.0]

    def test_elites_are_same_objects(self):
        """Elites are the original individuals, not copies."""
        population = make_population([1.0, 2.0])

        elite = EliteSelection(elite_count=1).get_elite(population)

        assert elite[0] is population[1]

    def test_zero_elites(self):
        """An elite count of zero selects nobody."""
        assert EliteSelection(elite_count=0).get_elite(make_population([1.0])) == []

    def test_more_elites_than_population(self):
        """The elite is capped by the population size."""
        elite = EliteSelection(elite_count=5).get_elite(make_population([1.0, 2.0]))

        assert len(elite) == 2

    def test_empty_population(self):
        """Empty populations have no elite."""
        assert EliteSelection().get_elite([]) == []


class TestFitnessProportionateSelection:
    """Tests for roulette-wheel selection."""

    def test_selects_requested_count(self, rng):
        """Exactly k individuals are drawn."""
        selection = FitnessProportionateSelection(rng)

        selected = selection.select(make_population([1.0, 2.0, 3.0]), 7)

        assert len(selected) == 7

    def test_zero_score_never_selected(self, rng):
        """An individual with zero score is never drawn while others score."""
        population = make_population([0.0, 0.0, 5.0])
        selection = FitnessProportionateSelection(rng)

        selected = selection.select(population, 50)

        assert all(ind is population[2] for ind in selected)

    def test_proportional_to_score(self):
        """Higher scores are drawn proportionally more often."""
        population = make_population([1.0, 3.0])
        selection = FitnessProportionateSelection(random.Random(0))

        counts = Counter(id(ind) for ind in selection.select(population, 4000))

        ratio = counts[id(population[1])] / counts[id(population[0])]
        assert 2.5 < ratio < 3.5

    def test_all_zero_falls_back_to_uniform(self):
        """With every score zero, parents are drawn uniformly."""
        population = make_population([0.0] * 4)
        selection = FitnessProportionateSelection(random.Random(0))

        selected = selection.select(population, 4000)

        counts = Counter(id(ind) for ind in selected)
        assert len(selected) == 4000
        assert len(counts) == 4
        assert all(800 < count < 1200 for count in counts.values())

    def test_empty_inputs(self, rng):
        """Nothing is drawn from an empty population or for k <= 0."""
        selection = FitnessProportionateSelection(rng)

        assert selection.select([], 3) == []
        assert selection.select(make_population([1.0]), 0) == []

    def test_seeded_selection_is_reproducible(self):
        """The same seed draws the same parents."""
        population = make_population([1.0, 2.0, 3.0, 4.0])

        first = FitnessProportionateSelection(random.Random(9)).select(population, 10)
        second = FitnessProportionateSelection(random.Random(9)).select(population, 10)

        assert [id(ind) for ind in first] == [id(ind) for ind in second]
