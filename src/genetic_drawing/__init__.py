"""genetic_drawing - approximate an image by evolving vector drawings."""

__version__ = "0.1.0"

from genetic_drawing.core.phenotype import Phenotype
from genetic_drawing.evolution.config import EvolutionConfig
from genetic_drawing.evolution.individual import Individual
from genetic_drawing.evolution.population import Population
from genetic_drawing.rendering.image_source import TargetImage, load_target
from genetic_drawing.rendering.renderer import Renderer

__all__ = [
    "Phenotype",
    "EvolutionConfig",
    "Individual",
    "Population",
    "TargetImage",
    "load_target",
    "Renderer",
]
