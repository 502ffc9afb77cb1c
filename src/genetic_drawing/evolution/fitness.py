"""Fitness evaluation against the target pixel buffer.

Fitness is 1.0 for a pixel-perfect match and falls as the rendered image
drifts from the target. Both metrics compare every channel of every pixel:

    squared:  1 - sum((rendered - target)^2) / (channels * 255^2)
    absolute: 1 - sum(|rendered - target|)   / (channels * 255)

where ``channels`` is width * height * channels-per-pixel.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

import numpy as np

from genetic_drawing.core.phenotype import Phenotype
from genetic_drawing.rendering.image_source import TargetImage
from genetic_drawing.rendering.renderer import Renderer


class FitnessMetric(Enum):
    """Pixel comparison used to score a rendering."""

    SQUARED = "squared"
    ABSOLUTE = "absolute"

    @classmethod
    def parse(cls, value: Union[str, "FitnessMetric"]) -> "FitnessMetric":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown fitness metric '{value}'. Available: {valid}") from None


def _difference(rendered: np.ndarray, target: np.ndarray) -> np.ndarray:
    if rendered.shape != target.shape:
        raise ValueError(f"Rendered shape {rendered.shape} does not match target {target.shape}")
    return rendered.astype(np.int64) - target.astype(np.int64)


def sum_squared_fitness(rendered: np.ndarray, target: np.ndarray) -> float:
    """Fitness from the sum of squared channel differences."""
    diff = _difference(rendered, target)
    return 1.0 - float(np.sum(diff * diff)) / (diff.size * 255.0 * 255.0)


def sum_absolute_fitness(rendered: np.ndarray, target: np.ndarray) -> float:
    """Fitness from the sum of absolute channel differences."""
    diff = _difference(rendered, target)
    return 1.0 - float(np.sum(np.abs(diff))) / (diff.size * 255.0)


METRICS = {
    FitnessMetric.SQUARED: sum_squared_fitness,
    FitnessMetric.ABSOLUTE: sum_absolute_fitness,
}


class FitnessEvaluator:
    """Renders DNA off-screen and scores it against the target.

    The scratch surface is shared by every evaluation and cleared before
    each render, so evaluations must not overlap.
    """

    def __init__(
        self,
        target: TargetImage,
        renderer: Optional[Renderer] = None,
        metric: Union[str, FitnessMetric] = FitnessMetric.SQUARED,
    ):
        self.target = target
        self.renderer = renderer if renderer is not None else Renderer()
        self.metric = FitnessMetric.parse(metric)
        self._score = METRICS[self.metric]
        self._scratch = self.renderer.new_surface(target.width, target.height)
        self.evaluations = 0

    def render(self, dna: np.ndarray, phenotype: Phenotype) -> np.ndarray:
        """Render DNA at target size and return a copy of the pixels."""
        self.renderer.draw(self._scratch, self.target.width, self.target.height, dna, phenotype)
        return np.asarray(self._scratch, dtype=np.uint8).copy()

    def evaluate(self, dna: np.ndarray, phenotype: Phenotype) -> float:
        rendered = self.render(dna, phenotype)
        self.evaluations += 1
        return self._score(rendered, self.target.pixels)
