"""Run-level configuration for an evolution."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Union

from genetic_drawing.core.dna import MutationPolicy
from genetic_drawing.core.phenotype import Phenotype
from genetic_drawing.evolution.fitness import FitnessMetric
from genetic_drawing.evolution.selection import survival_cutoff
from genetic_drawing.rendering.display import FRAME_MODES


@dataclass
class EvolutionConfig:
    """Configuration for one evolutionary run.

    Values are fixed for the lifetime of a population; changing any of them
    means starting over from a fresh population.
    """

    # Population parameters
    population_size: int = 50
    dna_length: int = 100
    phenotype: Union[str, Phenotype] = Phenotype.CIRCLES
    survival_rate: float = 0.2
    allow_self_pairing: bool = False

    # Genetic operators
    mutation_policy: Union[str, MutationPolicy] = MutationPolicy.CONTINUOUS
    mutation_chance: float = 0.01
    mutation_impact: float = 0.1

    # Evaluation
    fitness_metric: Union[str, FitnessMetric] = FitnessMetric.SQUARED
    reduction_factor: float = 5
    recessive_genes: bool = True

    # Output
    frame_mode: str = "center"
    log_interval: int = 1

    def __post_init__(self):
        self.phenotype = Phenotype.parse(self.phenotype)
        self.mutation_policy = MutationPolicy.parse(self.mutation_policy)
        self.fitness_metric = FitnessMetric.parse(self.fitness_metric)

    @property
    def gene_length(self) -> int:
        return self.phenotype.gene_length

    @property
    def cutoff(self) -> int:
        return survival_cutoff(self.population_size, self.survival_rate)

    def validate(self) -> "EvolutionConfig":
        """Check every field, returning self.

        Raises:
            ValueError: On the first invalid setting.
        """
        if self.population_size < 1:
            raise ValueError(f"population_size must be >= 1, got {self.population_size}")
        if self.dna_length < 1:
            raise ValueError(f"dna_length must be >= 1, got {self.dna_length}")
        if not 0 < self.survival_rate <= 1:
            raise ValueError(f"survival_rate must be in (0, 1], got {self.survival_rate}")
        if not 0 <= self.mutation_chance <= 1:
            raise ValueError(f"mutation_chance must be in [0, 1], got {self.mutation_chance}")
        if not 0 <= self.mutation_impact <= 1:
            raise ValueError(f"mutation_impact must be in [0, 1], got {self.mutation_impact}")
        if self.reduction_factor <= 0:
            raise ValueError(f"reduction_factor must be > 0, got {self.reduction_factor}")
        if self.frame_mode not in FRAME_MODES:
            raise ValueError(f"frame_mode must be one of {FRAME_MODES}, got {self.frame_mode}")
        if self.log_interval < 1:
            raise ValueError(f"log_interval must be >= 1, got {self.log_interval}")

        minimum = 1 if self.allow_self_pairing else 2
        if self.cutoff < minimum:
            raise ValueError(
                f"survival_rate {self.survival_rate} x population_size {self.population_size} "
                f"leaves {self.cutoff} parent(s); at least {minimum} required"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dictionary with enums replaced by their tags."""
        return {
            key: value.value if isinstance(value, Enum) else value
            for key, value in asdict(self).items()
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EvolutionConfig":
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in names})
