"""DNA model and genetic operators.

DNA is a 2D array of shape (dna_length, gene_length) with every value in
[0, 1]. Row order is paint order and also the axis along which
single-point crossover splits.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union

import numpy as np


class MutationPolicy(Enum):
    """How a selected value is mutated."""

    CONTINUOUS = "continuous"
    DISCRETE = "discrete"

    @classmethod
    def parse(cls, value: Union[str, "MutationPolicy"]) -> "MutationPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown mutation policy '{value}'. Available: {valid}") from None


def _freeze(dna: np.ndarray) -> np.ndarray:
    dna.flags.writeable = False
    return dna


def random_dna(dna_length: int, gene_length: int, rng: np.random.Generator) -> np.ndarray:
    """Create orphan DNA with every value drawn uniformly from [0, 1)."""
    if dna_length < 1:
        raise ValueError(f"dna_length must be >= 1, got {dna_length}")
    if gene_length < 1:
        raise ValueError(f"gene_length must be >= 1, got {gene_length}")
    return _freeze(rng.random((dna_length, gene_length)))


def crossover_at(first: np.ndarray, second: np.ndarray, split: int) -> np.ndarray:
    """Combine two DNA arrays at a split index.

    Genes at indices <= split come from ``first``, the rest from ``second``.

    Raises:
        ValueError: If the parents have different shapes or split is out of range.
    """
    if first.shape != second.shape:
        raise ValueError(f"Parent DNA shapes differ: {first.shape} vs {second.shape}")
    if not 0 <= split < first.shape[0]:
        raise ValueError(f"split must be in [0, {first.shape[0]}), got {split}")

    child = np.array(second, dtype=np.float64, copy=True)
    child[: split + 1] = first[: split + 1]
    return child


def single_point_crossover(
    first: np.ndarray,
    second: np.ndarray,
    rng: np.random.Generator,
) -> Tuple[np.ndarray, int]:
    """Crossover with one split index drawn per mating event.

    Returns:
        Tuple of (child DNA, split index).
    """
    split = int(rng.integers(0, first.shape[0]))
    return crossover_at(first, second, split), split


def mutate_continuous(
    dna: np.ndarray,
    rng: np.random.Generator,
    chance: float = 0.01,
    impact: float = 0.1,
) -> np.ndarray:
    """Nudge each value by up to +/- impact with the given chance.

    A nudged value that leaves [0, 1] is replaced by a fresh uniform draw
    rather than clamped.
    """
    selected = rng.random(dna.shape) < chance
    perturbation = rng.uniform(-impact, impact, size=dna.shape)

    mutated = np.where(selected, dna + perturbation, dna)
    out_of_range = (mutated < 0.0) | (mutated > 1.0)
    if out_of_range.any():
        mutated[out_of_range] = rng.random(int(out_of_range.sum()))
    return mutated


def mutate_discrete(
    dna: np.ndarray,
    rng: np.random.Generator,
    chance: float = 0.01,
) -> np.ndarray:
    """Replace each value with a fresh uniform draw with the given chance."""
    selected = rng.random(dna.shape) < chance
    replacement = rng.random(dna.shape)
    return np.where(selected, replacement, dna)


def mutate(
    dna: np.ndarray,
    rng: np.random.Generator,
    policy: MutationPolicy = MutationPolicy.CONTINUOUS,
    chance: float = 0.01,
    impact: float = 0.1,
) -> np.ndarray:
    """Apply the run's mutation policy and return read-only DNA."""
    if policy is MutationPolicy.CONTINUOUS:
        mutated = mutate_continuous(dna, rng, chance, impact)
    else:
        mutated = mutate_discrete(dna, rng, chance)
    return _freeze(mutated)
