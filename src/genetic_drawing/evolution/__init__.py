"""Evolutionary core: fitness, individuals, selection and populations."""

from genetic_drawing.evolution.fitness import (
    FitnessEvaluator,
    FitnessMetric,
    sum_squared_fitness,
    sum_absolute_fitness,
)
from genetic_drawing.evolution.individual import Individual
from genetic_drawing.evolution.selection import (
    ParentSelector,
    rank_by_fitness,
    survival_cutoff,
)
from genetic_drawing.evolution.config import EvolutionConfig
from genetic_drawing.evolution.population import Population

__all__ = [
    "FitnessEvaluator",
    "FitnessMetric",
    "sum_squared_fitness",
    "sum_absolute_fitness",
    "Individual",
    "ParentSelector",
    "rank_by_fitness",
    "survival_cutoff",
    "EvolutionConfig",
    "Population",
]
