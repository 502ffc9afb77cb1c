"""A single candidate drawing."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from genetic_drawing.core.dna import (
    MutationPolicy,
    mutate,
    random_dna,
    single_point_crossover,
)
from genetic_drawing.core.phenotype import Phenotype
from genetic_drawing.evolution.fitness import FitnessEvaluator
from genetic_drawing.rendering.renderer import Renderer

_identities = itertools.count(1)


def next_identity() -> int:
    """Return a fresh identity, unique within this process."""
    return next(_identities)


@dataclass(frozen=True, eq=False)
class Individual:
    """DNA plus the fitness it scored when it was created.

    Individuals never change after construction; fitness is evaluated once
    by :meth:`orphan` or :meth:`child`.
    """

    dna: np.ndarray = field(repr=False)
    phenotype: Phenotype
    fitness: float
    identity: int = field(default_factory=next_identity)
    parents: Optional[Tuple[int, int]] = None

    @classmethod
    def orphan(
        cls,
        evaluator: FitnessEvaluator,
        rng: np.random.Generator,
        dna_length: int = 100,
        phenotype: Phenotype = Phenotype.CIRCLES,
    ) -> "Individual":
        """Create an individual with random DNA and no parents."""
        phenotype = Phenotype.parse(phenotype)
        dna = random_dna(dna_length, phenotype.gene_length, rng)
        return cls(dna=dna, phenotype=phenotype, fitness=evaluator.evaluate(dna, phenotype))

    @classmethod
    def child(
        cls,
        mother: "Individual",
        father: "Individual",
        evaluator: FitnessEvaluator,
        rng: np.random.Generator,
        policy: MutationPolicy = MutationPolicy.CONTINUOUS,
        chance: float = 0.01,
        impact: float = 0.1,
        allow_self_pairing: bool = False,
    ) -> "Individual":
        """Create an individual from two parents.

        Genes up to a random split index come from the father, the rest from
        the mother; the combined DNA is then mutated.

        Raises:
            ValueError: If both parents are the same individual (unless
                ``allow_self_pairing`` is set) or their phenotypes differ.
        """
        if mother.identity == father.identity and not allow_self_pairing:
            raise ValueError(f"Parents must be distinct, both are #{mother.identity}")
        if mother.phenotype is not father.phenotype:
            raise ValueError(
                f"Parent phenotypes differ: {mother.phenotype.value} vs {father.phenotype.value}"
            )

        combined, _ = single_point_crossover(father.dna, mother.dna, rng)
        dna = mutate(combined, rng, policy, chance, impact)
        return cls(
            dna=dna,
            phenotype=mother.phenotype,
            fitness=evaluator.evaluate(dna, mother.phenotype),
            parents=(mother.identity, father.identity),
        )

    @property
    def is_orphan(self) -> bool:
        return self.parents is None

    def render(self, surface, width, height, renderer: Optional[Renderer] = None, **kwargs) -> None:
        """Draw this individual's DNA onto ``surface``."""
        (renderer or Renderer()).draw(surface, width, height, self.dna, self.phenotype, **kwargs)
