"""Rasterize DNA onto a Pillow surface.

The surface must be an RGB image. Drawing goes through an ``RGBA``
ImageDraw so translucent primitives blend with what is already painted.
Gene coordinates are fractions of the drawing area, so the same DNA can be
drawn at any size.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from genetic_drawing.core.phenotype import Phenotype

Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)

RECESSIVE_THRESHOLD = 0.5
BEZIER_SEGMENTS = 24


def _channel(value: float) -> int:
    return int(math.floor(min(max(value, 0.0), 1.0) * 255))


def _rgba(red: float, green: float, blue: float, alpha: float) -> Tuple[int, int, int, int]:
    return (_channel(red), _channel(green), _channel(blue), _channel(alpha))


def quadratic_curve(
    start: Tuple[float, float],
    control: Tuple[float, float],
    end: Tuple[float, float],
    segments: int = BEZIER_SEGMENTS,
) -> list:
    """Sample a quadratic Bezier curve into polyline points."""
    t = np.linspace(0.0, 1.0, segments + 1)
    u = 1.0 - t
    xs = u * u * start[0] + 2 * u * t * control[0] + t * t * end[0]
    ys = u * u * start[1] + 2 * u * t * control[1] + t * t * end[1]
    return list(zip(xs.tolist(), ys.tolist()))


class Renderer:
    """Draws DNA with one primitive per active gene.

    Attributes:
        background: Fill color used to clear the drawing area.
        recessive_genes: Skip genes whose activation flag is above 0.5.
        stroke_color: Color used to stroke bezier curves.
        circle_radius_divisor: Circle radius is ``gene * height / divisor``.
        alpha_offset: Subtracted from circle and dot alpha before drawing.
    """

    def __init__(
        self,
        background: Color = WHITE,
        recessive_genes: bool = True,
        stroke_color: Color = BLACK,
        circle_radius_divisor: float = 15.0,
        alpha_offset: float = 0.3,
    ):
        if circle_radius_divisor <= 0:
            raise ValueError(f"circle_radius_divisor must be > 0, got {circle_radius_divisor}")

        self.background = tuple(background)
        self.recessive_genes = recessive_genes
        self.stroke_color = tuple(stroke_color)
        self.circle_radius_divisor = circle_radius_divisor
        self.alpha_offset = alpha_offset

        self._draw_for: Dict[Phenotype, Callable] = {
            Phenotype.LINES: self.draw_line,
            Phenotype.BEZIER: self.draw_bezier,
            Phenotype.DOTS: self.draw_dot,
            Phenotype.CIRCLES: self.draw_circle,
            Phenotype.MIXED: self.draw_mixed,
        }

    def new_surface(self, width: int, height: int) -> Image.Image:
        """Create an RGB surface filled with the background color."""
        return Image.new("RGB", (int(width), int(height)), self.background)

    def is_active(self, gene: Sequence[float]) -> bool:
        return not (self.recessive_genes and gene[0] > RECESSIVE_THRESHOLD)

    def draw(
        self,
        surface: Image.Image,
        width: float,
        height: float,
        dna: np.ndarray,
        phenotype: Phenotype,
        clear: bool = True,
        origin: Tuple[float, float] = (0, 0),
    ) -> None:
        """Paint every active gene of ``dna`` onto ``surface``.

        Args:
            surface: RGB Pillow image to draw on.
            width: Width of the drawing area in pixels.
            height: Height of the drawing area in pixels.
            dna: Array of genes, painted in order.
            phenotype: How each gene is interpreted.
            clear: Fill the drawing area with the background first.
            origin: Top-left corner of the drawing area on the surface.
        """
        if surface.mode != "RGB":
            raise ValueError(f"surface must be an RGB image, got mode {surface.mode}")

        draw = ImageDraw.Draw(surface, "RGBA")
        ox, oy = origin

        if clear:
            draw.rectangle(
                [ox, oy, ox + width - 1, oy + height - 1],
                fill=self.background,
            )

        paint = self._draw_for[Phenotype.parse(phenotype)]
        for gene in np.asarray(dna):
            if not self.is_active(gene):
                continue
            paint(draw, width, height, gene, origin)

    def draw_circle(self, draw, width, height, gene, origin=(0, 0)) -> None:
        _, radius, center_x, center_y, red, green, blue, alpha = gene[:8]
        ox, oy = origin
        r = radius * (height / self.circle_radius_divisor)
        cx = ox + width * center_x
        cy = oy + height * center_y
        draw.ellipse(
            [cx - r, cy - r, cx + r, cy + r],
            fill=_rgba(red, green, blue, alpha - self.alpha_offset),
        )

    def draw_dot(self, draw, width, height, gene, origin=(0, 0)) -> None:
        _, center_x, center_y, red, green, blue, alpha = gene[:7]
        ox, oy = origin
        r = min(width, height) / 50
        cx = ox + width * center_x
        cy = oy + height * center_y
        draw.ellipse(
            [cx - r, cy - r, cx + r, cy + r],
            fill=_rgba(red, green, blue, alpha - self.alpha_offset),
        )

    def draw_line(self, draw, width, height, gene, origin=(0, 0)) -> None:
        _, from_x, from_y, to_x, to_y, red, green, blue, alpha = gene[:9]
        ox, oy = origin
        draw.line(
            [(ox + width * from_x, oy + height * from_y), (ox + width * to_x, oy + height * to_y)],
            fill=_rgba(red, green, blue, alpha),
            width=max(1, int(min(width, height) / 200)),
        )

    def draw_bezier(self, draw, width, height, gene, origin=(0, 0)) -> None:
        _, from_x, from_y, to_x, to_y, control_x, control_y = gene[:7]
        ox, oy = origin
        points = quadratic_curve(
            (ox + width * from_x, oy + height * from_y),
            (ox + width * control_x, oy + height * control_y),
            (ox + width * to_x, oy + height * to_y),
        )
        draw.line(points, fill=self.stroke_color, width=1)

    def draw_mixed(self, draw, width, height, gene, origin=(0, 0)) -> None:
        phenotype = Phenotype.for_selector(gene[1])
        payload_length = phenotype.gene_length - 1
        sub_gene = np.concatenate(([gene[0]], gene[2:2 + payload_length]))
        self._draw_for[phenotype](draw, width, height, sub_gene, origin)
