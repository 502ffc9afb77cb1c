"""Genome representation: phenotypes and DNA operators."""

from genetic_drawing.core.phenotype import Phenotype, GENE_LENGTH
from genetic_drawing.core.dna import (
    MutationPolicy,
    random_dna,
    crossover_at,
    single_point_crossover,
    mutate,
    mutate_continuous,
    mutate_discrete,
)

__all__ = [
    "Phenotype",
    "GENE_LENGTH",
    "MutationPolicy",
    "random_dna",
    "crossover_at",
    "single_point_crossover",
    "mutate",
    "mutate_continuous",
    "mutate_discrete",
]
