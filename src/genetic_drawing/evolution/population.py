"""Generational population of candidate drawings."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from genetic_drawing.evolution.config import EvolutionConfig
from genetic_drawing.evolution.fitness import FitnessEvaluator
from genetic_drawing.evolution.individual import Individual
from genetic_drawing.evolution.selection import ParentSelector, rank_by_fitness
from genetic_drawing.rendering.image_source import TargetImage
from genetic_drawing.rendering.renderer import Renderer

logger = logging.getLogger(__name__)


class Population:
    """Owns one generation and replaces it wholesale on every iteration.

    There is no elitism: the fittest individual only reaches the next
    generation through its children.
    """

    def __init__(
        self,
        config: EvolutionConfig,
        target: TargetImage,
        renderer: Optional[Renderer] = None,
        seed: Optional[int] = None,
    ):
        """Validate the configuration and spawn the first generation.

        Args:
            config: Run configuration.
            target: Image every individual is scored against.
            renderer: Renderer used for fitness evaluation. Defaults to one
                honouring ``config.recessive_genes``.
            seed: Seed for the random source.

        Raises:
            ValueError: If the configuration is invalid. Nothing is spawned.
        """
        self.config = config.validate()
        self.rng = np.random.default_rng(seed)
        self.renderer = renderer if renderer is not None else Renderer(
            recessive_genes=config.recessive_genes
        )
        self.evaluator = FitnessEvaluator(target, self.renderer, config.fitness_metric)

        self.generation = 0
        self.history: Dict[str, List[float]] = {
            'best_fitness': [],
            'mean_fitness': [],
        }

        self._individuals = rank_by_fitness(
            Individual.orphan(self.evaluator, self.rng, config.dna_length, config.phenotype)
            for _ in range(config.population_size)
        )
        self._fittest = self._individuals[0]

        logger.debug(
            f"Spawned {self.size} orphans ({config.phenotype.value}, "
            f"{config.dna_length} genes), best fitness {self._fittest.fitness:.6f}"
        )

    @property
    def size(self) -> int:
        return self.config.population_size

    @property
    def individuals(self) -> Tuple[Individual, ...]:
        return tuple(self._individuals)

    @property
    def fittest(self) -> Individual:
        """Fittest individual as of the last ranking."""
        return self._fittest

    def iterate(self) -> Individual:
        """Rank the current generation and replace it with its offspring.

        Returns:
            The fittest individual of the generation that was just replaced.
        """
        ranked = rank_by_fitness(self._individuals)
        self._fittest = ranked[0]

        fitnesses = [ind.fitness for ind in ranked]
        self.history['best_fitness'].append(self._fittest.fitness)
        self.history['mean_fitness'].append(float(np.mean(fitnesses)))

        selector = ParentSelector(
            ranked,
            self.config.cutoff,
            self.rng,
            allow_self_pairing=self.config.allow_self_pairing,
        )
        self._individuals = selector.breed(
            self.size,
            self.evaluator,
            policy=self.config.mutation_policy,
            chance=self.config.mutation_chance,
            impact=self.config.mutation_impact,
        )
        self.generation += 1

        return self._fittest
