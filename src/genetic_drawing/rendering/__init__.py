"""Rendering: DNA rasterization, target loading and frame composition."""

from genetic_drawing.rendering.renderer import Renderer, WHITE, BLACK
from genetic_drawing.rendering.image_source import TargetImage, load_target
from genetic_drawing.rendering.display import (
    FRAME_MODES,
    centering_parameters,
    compose_frame,
    save_frame,
)

__all__ = [
    "Renderer",
    "WHITE",
    "BLACK",
    "TargetImage",
    "load_target",
    "FRAME_MODES",
    "centering_parameters",
    "compose_frame",
    "save_frame",
]
