"""Frame composition for presenting the fittest individual."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

from PIL import Image

from genetic_drawing.rendering.renderer import Renderer

if TYPE_CHECKING:
    from genetic_drawing.evolution.individual import Individual
    from genetic_drawing.rendering.image_source import TargetImage

FRAME_MODES = ("center", "side", "overlay")


def centering_parameters(
    image_dims: Tuple[float, float],
    canvas_dims: Tuple[float, float],
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Fit an image into a canvas, preserving aspect ratio.

    Args:
        image_dims: (width, height) of the image.
        canvas_dims: (width, height) of the destination canvas.

    Returns:
        Tuple of ((width, height), (x, y)) where the first item is the fitted
        size and the second the offset that centres it on the canvas.
    """
    image_ratio = image_dims[0] / image_dims[1]
    canvas_ratio = canvas_dims[0] / canvas_dims[1]

    if image_ratio > canvas_ratio:
        dimensions = (canvas_dims[0], canvas_dims[0] / image_ratio)
        translate = (0.0, (canvas_dims[1] - dimensions[1]) / 2)
    else:
        dimensions = (canvas_dims[1] * image_ratio, canvas_dims[1])
        translate = ((canvas_dims[0] - dimensions[0]) / 2, 0.0)

    return dimensions, translate


def compose_frame(
    individual: "Individual",
    renderer: Renderer,
    canvas_size: Tuple[int, int],
    target: Optional["TargetImage"] = None,
    mode: str = "center",
) -> Image.Image:
    """Render an individual into a new display image.

    Modes:
        center: letterbox the drawing into the canvas.
        side: drawing on the left at target size, target on the right.
        overlay: target scaled to the canvas, drawing painted on top.
    """
    if mode not in FRAME_MODES:
        raise ValueError(f"mode must be one of {FRAME_MODES}, got {mode}")
    if mode != "center" and target is None:
        raise ValueError(f"mode '{mode}' needs a target image")

    if mode == "side":
        width, height = target.size
        frame = renderer.new_surface(width * 2, height)
        individual.render(frame, width, height, renderer=renderer)
        frame.paste(target.to_image(), (width, 0))
        return frame

    frame = renderer.new_surface(*canvas_size)

    if mode == "overlay":
        backdrop = target.source if target.source is not None else target.to_image()
        frame.paste(backdrop.resize(tuple(canvas_size)), (0, 0))
        individual.render(frame, canvas_size[0], canvas_size[1], renderer=renderer, clear=False)
        return frame

    image_dims = target.source_size if target is not None else canvas_size
    dimensions, translate = centering_parameters(image_dims, canvas_size)
    individual.render(frame, dimensions[0], dimensions[1], renderer=renderer, origin=translate)
    return frame


def save_frame(image: Image.Image, path: str | Path) -> Path:
    """Save a composed frame as PNG."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")
    return path
