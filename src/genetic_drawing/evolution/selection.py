"""Parent selection and reproduction.

Parents are drawn from the top ``cutoff`` individuals of a population ranked
by descending fitness. Index sampling uses the half-normal distribution so
rank 0 is the most likely pick while every survivor keeps a nonzero chance:

    g = |N(0, 1)|, redrawn as U(0, 1) when g > 1
    index = floor(g * cutoff)
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

from genetic_drawing.core.dna import MutationPolicy
from genetic_drawing.evolution.fitness import FitnessEvaluator
from genetic_drawing.evolution.individual import Individual


def survival_cutoff(population_size: int, survival_rate: float) -> int:
    """Number of top-ranked individuals eligible to reproduce."""
    return int(math.floor(survival_rate * population_size))


def rank_by_fitness(individuals: Sequence[Individual]) -> List[Individual]:
    """Sort individuals by descending fitness (stable for ties)."""
    return sorted(individuals, key=lambda ind: ind.fitness, reverse=True)


class ParentSelector:
    """Draws parent pairs biased toward the fittest survivors."""

    def __init__(
        self,
        ranked: Sequence[Individual],
        cutoff: int,
        rng: np.random.Generator,
        allow_self_pairing: bool = False,
    ):
        minimum = 1 if allow_self_pairing else 2
        if cutoff < minimum:
            raise ValueError(
                f"survival cutoff must be >= {minimum} to pick parents, got {cutoff}"
            )
        if cutoff > len(ranked):
            raise ValueError(f"survival cutoff {cutoff} exceeds population of {len(ranked)}")

        self.survivors = list(ranked[:cutoff])
        self.cutoff = cutoff
        self.rng = rng
        self.allow_self_pairing = allow_self_pairing

    def fit_parent_index(self) -> int:
        g = abs(self.rng.standard_normal())
        if g > 1:
            g = self.rng.random()
        # g == 1.0 exactly would land one past the end
        return min(int(math.floor(g * self.cutoff)), self.cutoff - 1)

    def fit_parent(self) -> Individual:
        return self.survivors[self.fit_parent_index()]

    def choose_parents(self) -> Tuple[Individual, Individual]:
        """Draw a (mother, father) pair with distinct identities.

        With a single survivor and self-pairing allowed, that survivor is
        returned as both parents.
        """
        if self.cutoff == 1:
            only = self.survivors[0]
            return only, only

        while True:
            mother = self.fit_parent()
            father = self.fit_parent()
            if mother.identity != father.identity:
                return mother, father

    def breed(
        self,
        count: int,
        evaluator: FitnessEvaluator,
        policy: MutationPolicy = MutationPolicy.CONTINUOUS,
        chance: float = 0.01,
        impact: float = 0.1,
    ) -> List[Individual]:
        """Produce ``count`` children from freshly drawn parent pairs."""
        children = []
        for _ in range(count):
            mother, father = self.choose_parents()
            children.append(
                Individual.child(
                    mother,
                    father,
                    evaluator,
                    self.rng,
                    policy=policy,
                    chance=chance,
                    impact=impact,
                    allow_self_pairing=self.allow_self_pairing,
                )
            )
        return children
