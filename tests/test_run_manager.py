"""Tests for run output organisation."""

import json

import numpy as np
import pytest
from PIL import Image

from genetic_drawing.utils.run_manager import RunManager


class TestRunManager:
    """Tests for run creation."""

    def test_create_run_layout(self, tmp_path):
        """Test a run directory is created with its subdirectories."""
        run = RunManager(tmp_path).create_run("my target", config={"population_size": 5})
        assert run.run_dir.parent == tmp_path / "runs"
        assert run.images_dir.is_dir()
        assert run.logs_dir.is_dir()
        assert "my_target" in run.metadata.run_id
        assert json.loads((run.run_dir / "config.json").read_text()) == {"population_size": 5}

    def test_unique_run_ids(self, tmp_path):
        """Test runs created in the same second get distinct directories."""
        manager = RunManager(tmp_path)
        first = manager.create_run("same")
        second = manager.create_run("same")
        assert first.run_dir != second.run_dir


class TestRun:
    """Tests for saving run outputs."""

    def test_save_images(self, tmp_path):
        """Test arrays and Pillow images are both saved."""
        run = RunManager(tmp_path).create_run("images")
        array_path = run.save_image(np.zeros((4, 4, 3), dtype=np.uint8), "array")
        image_path = run.save_image(Image.new("RGB", (4, 4)), "image")
        assert array_path.exists() and image_path.exists()

    def test_save_image_rejects_unknown(self, tmp_path):
        """Test unsupported image data raises ValueError."""
        run = RunManager(tmp_path).create_run("bad")
        with pytest.raises(ValueError, match="Unknown image type"):
            run.save_image([1, 2, 3], "bad")

    def test_results_and_completion(self, tmp_path):
        """Test results are stamped and completion updates metadata."""
        run = RunManager(tmp_path).create_run("done")
        run.save_results({"summary": {"best_fitness": 0.9}})
        run.complete("completed", {"best_fitness": 0.9})

        results = json.loads((run.run_dir / "results.json").read_text())
        metadata = json.loads((run.run_dir / "metadata.json").read_text())
        assert results["_run_id"] == run.metadata.run_id
        assert metadata["status"] == "completed"
        assert metadata["summary"] == {"best_fitness": 0.9}
        assert metadata["completed_at"] is not None
