"""Tests for frame composition."""

import numpy as np
import pytest
from PIL import Image

from genetic_drawing.core.phenotype import Phenotype
from genetic_drawing.evolution.individual import Individual
from genetic_drawing.rendering.display import centering_parameters, compose_frame, save_frame
from genetic_drawing.rendering.image_source import TargetImage
from genetic_drawing.rendering.renderer import Renderer


def blank_individual():
    dna = np.full((3, Phenotype.CIRCLES.gene_length), 0.9)
    return Individual(dna=dna, phenotype=Phenotype.CIRCLES, fitness=0.0)


def make_target(width=4, height=2, value=30):
    return TargetImage.from_array(np.full((height, width, 3), value, dtype=np.uint8))


class TestCenteringParameters:
    """Tests for letterbox math."""

    def test_wide_image(self):
        """Test a wide image is fitted to the width and padded vertically."""
        dimensions, translate = centering_parameters((200, 100), (100, 100))
        assert dimensions == (100, 50)
        assert translate == (0.0, 25.0)

    def test_tall_image(self):
        """Test a tall image is fitted to the height and padded horizontally."""
        dimensions, translate = centering_parameters((100, 200), (100, 100))
        assert dimensions == (50, 100)
        assert translate == (25.0, 0.0)

    def test_same_ratio(self):
        """Test matching aspect ratios fill the canvas."""
        dimensions, translate = centering_parameters((40, 30), (400, 300))
        assert dimensions == pytest.approx((400, 300))
        assert translate == pytest.approx((0.0, 0.0))


class TestComposeFrame:
    """Tests for compose_frame modes."""

    def test_center_letterboxes(self):
        """Test center mode draws only inside the fitted area."""
        dna = np.array([[0.0, 1.0, 0.5, 0.5, 0.0, 0.0, 0.0, 1.0]])
        individual = Individual(dna=dna, phenotype=Phenotype.CIRCLES, fitness=0.0)
        frame = compose_frame(individual, Renderer(), (40, 40), target=make_target(4, 2))
        values = np.asarray(frame)
        assert frame.size == (40, 40)
        assert values[20, 20].max() < 255
        assert np.all(values[:10] == 255)
        assert np.all(values[30:] == 255)

    def test_center_without_target(self):
        """Test center mode fills the canvas when no target is given."""
        frame = compose_frame(blank_individual(), Renderer(), (12, 8))
        assert frame.size == (12, 8)
        assert np.all(np.asarray(frame) == 255)

    def test_side_by_side(self):
        """Test side mode places the target to the right of the drawing."""
        target = make_target(4, 2)
        frame = compose_frame(blank_individual(), Renderer(), (100, 100), target=target, mode="side")
        values = np.asarray(frame)
        assert frame.size == (8, 2)
        assert np.all(values[:, :4] == 255)
        assert np.all(values[:, 4:] == 30)

    def test_overlay(self):
        """Test overlay mode keeps the target visible under recessive genes."""
        frame = compose_frame(blank_individual(), Renderer(), (8, 4), target=make_target(4, 2), mode="overlay")
        assert np.all(np.asarray(frame) == 30)

    def test_modes_need_target(self):
        """Test side and overlay modes require a target."""
        for mode in ("side", "overlay"):
            with pytest.raises(ValueError, match="target"):
                compose_frame(blank_individual(), Renderer(), (10, 10), mode=mode)

    def test_unknown_mode(self):
        """Test unknown modes are rejected."""
        with pytest.raises(ValueError, match="mode"):
            compose_frame(blank_individual(), Renderer(), (10, 10), mode="tiled")


class TestSaveFrame:
    """Tests for saving frames."""

    def test_writes_png(self, tmp_path):
        """Test frames are written as PNG, creating directories."""
        path = save_frame(Image.new("RGB", (3, 3)), tmp_path / "frames" / "best.png")
        assert path.exists()
        with Image.open(path) as img:
            assert img.format == "PNG"
