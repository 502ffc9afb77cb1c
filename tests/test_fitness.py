"""Tests for fitness metrics and the evaluator."""

import numpy as np
import pytest

from genetic_drawing.core.phenotype import Phenotype
from genetic_drawing.evolution.fitness import (
    FitnessEvaluator,
    FitnessMetric,
    sum_absolute_fitness,
    sum_squared_fitness,
)
from genetic_drawing.rendering.image_source import TargetImage
from genetic_drawing.rendering.renderer import Renderer


def solid(value, width=2, height=2):
    return np.full((height, width, 3), value, dtype=np.uint8)


def black_circles(count=1):
    return np.repeat(np.array([[0.0, 1.0, 0.5, 0.5, 0.0, 0.0, 0.0, 1.0]]), count, axis=0)


def recessive(length=5):
    dna = np.random.default_rng(0).random((length, 8))
    dna[:, 0] = 0.75
    return dna


METRIC_FUNCTIONS = [sum_squared_fitness, sum_absolute_fitness]


class TestMetrics:
    """Tests for the pixel comparison formulas."""

    @pytest.mark.parametrize("metric", METRIC_FUNCTIONS)
    def test_perfect_match(self, metric):
        """Test identical buffers score exactly 1.0."""
        image = np.random.default_rng(0).integers(0, 256, (5, 7, 3), dtype=np.uint8)
        assert metric(image, image.copy()) == 1.0

    @pytest.mark.parametrize("metric", METRIC_FUNCTIONS)
    def test_white_against_black(self, metric):
        """Test maximal difference scores 0.0."""
        assert metric(solid(0), solid(255)) == pytest.approx(0.0)

    @pytest.mark.parametrize("metric", METRIC_FUNCTIONS)
    def test_monotonic_in_difference(self, metric):
        """Test fitness never rises as the per-channel difference grows."""
        target = solid(0, 4, 4)
        scores = [metric(solid(d, 4, 4), target) for d in (0, 1, 10, 50, 128, 200, 255)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_absolute_value(self):
        """Test the absolute metric normalises by 255 per channel."""
        assert sum_absolute_fitness(solid(51), solid(0)) == pytest.approx(0.8)

    def test_squared_value(self):
        """Test the squared metric normalises by 255^2 per channel."""
        assert sum_squared_fitness(solid(0), solid(51)) == pytest.approx(1 - 0.04)

    def test_no_uint8_wraparound(self):
        """Test differences are computed without unsigned overflow."""
        assert sum_absolute_fitness(solid(0), solid(255)) == pytest.approx(0.0)
        assert sum_absolute_fitness(solid(255), solid(0)) == pytest.approx(0.0)

    def test_shape_mismatch(self):
        """Test buffers of different geometry are rejected."""
        with pytest.raises(ValueError, match="does not match"):
            sum_squared_fitness(solid(0, 2, 2), solid(0, 3, 2))

    def test_parse_metric(self):
        """Test metric tags resolve and unknown ones fail."""
        assert FitnessMetric.parse("absolute") is FitnessMetric.ABSOLUTE
        with pytest.raises(ValueError):
            FitnessMetric.parse("ssim")


class TestFitnessEvaluator:
    """Tests for render-and-compare evaluation."""

    def test_background_matches_white_target(self):
        """Test an all-recessive DNA scores 1.0 against a white target."""
        evaluator = FitnessEvaluator(TargetImage.from_array(solid(255, 6, 4)))
        assert evaluator.evaluate(recessive(), Phenotype.CIRCLES) == 1.0

    def test_render_geometry(self):
        """Test renders match the target's geometry."""
        evaluator = FitnessEvaluator(TargetImage.from_array(solid(255, 6, 4)))
        rendered = evaluator.render(recessive(), Phenotype.CIRCLES)
        assert rendered.shape == (4, 6, 3)
        assert rendered.dtype == np.uint8

    def test_scratch_surface_reset(self):
        """Test one evaluation does not leak pixels into the next."""
        renderer = Renderer(circle_radius_divisor=0.5)
        evaluator = FitnessEvaluator(TargetImage.from_array(solid(255)), renderer)
        assert evaluator.evaluate(black_circles(), Phenotype.CIRCLES) < 1.0
        assert evaluator.evaluate(recessive(), Phenotype.CIRCLES) == 1.0

    def test_counts_evaluations(self):
        """Test the evaluator counts renders."""
        evaluator = FitnessEvaluator(TargetImage.from_array(solid(255)))
        for _ in range(3):
            evaluator.evaluate(recessive(), Phenotype.CIRCLES)
        assert evaluator.evaluations == 3

    def test_target_untouched(self):
        """Test evaluation never modifies the target pixels."""
        target = TargetImage.from_array(solid(128, 5, 5))
        evaluator = FitnessEvaluator(target, Renderer(circle_radius_divisor=1.0))
        evaluator.evaluate(black_circles(3), Phenotype.CIRCLES)
        assert np.all(target.pixels == 128)

    @pytest.mark.parametrize("metric", list(FitnessMetric))
    def test_black_circle_on_black_target(self, metric):
        """Test covering a black target with black circles approaches 1.0."""
        renderer = Renderer(circle_radius_divisor=0.5)
        evaluator = FitnessEvaluator(TargetImage.from_array(solid(0)), renderer, metric)

        single = evaluator.evaluate(black_circles(1), Phenotype.CIRCLES)
        stacked = evaluator.evaluate(black_circles(10), Phenotype.CIRCLES)

        assert 0.6 < single < 1.0
        assert stacked == pytest.approx(1.0, abs=1e-2)
        assert stacked > single

    def test_metric_from_tag(self):
        """Test the metric may be given as a tag."""
        evaluator = FitnessEvaluator(TargetImage.from_array(solid(0)), metric="absolute")
        assert evaluator.metric is FitnessMetric.ABSOLUTE
        assert evaluator.evaluate(recessive(), Phenotype.CIRCLES) == pytest.approx(0.0)
