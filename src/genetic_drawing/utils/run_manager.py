"""Run output organisation.

Each evolution run gets its own timestamped directory:

    output/
        runs/
            YYYYMMDD_HHMMSS_<description>/
                config.json       # Full configuration
                metadata.json     # Status, timestamps, summary
                results.json      # Final results
                images/           # Rendered frames of the fittest drawing
                logs/             # Run log

Population state is never written; a run cannot be resumed.
"""

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
from PIL import Image


@dataclass
class RunMetadata:
    """Metadata for a run."""
    run_id: str
    description: str
    created_at: str
    completed_at: Optional[str] = None
    status: str = "running"
    config: Optional[Dict[str, Any]] = None
    summary: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'RunMetadata':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


class Run:
    """A single evolution run's output directory."""

    def __init__(self, run_dir: Path, metadata: RunMetadata):
        self.run_dir = Path(run_dir)
        self.metadata = metadata

    @property
    def images_dir(self) -> Path:
        return self.run_dir / "images"

    @property
    def logs_dir(self) -> Path:
        return self.run_dir / "logs"

    @property
    def log_path(self) -> Path:
        return self.logs_dir / "run.log"

    def _save_metadata(self):
        with open(self.run_dir / "metadata.json", "w") as f:
            json.dump(self.metadata.to_dict(), f, indent=2)

    def save_config(self, config: Dict[str, Any]):
        """Save configuration to config.json."""
        self.metadata.config = config
        with open(self.run_dir / "config.json", "w") as f:
            json.dump(config, f, indent=2)
        self._save_metadata()

    def save_results(self, results: Dict[str, Any]):
        """Save results to results.json, stamped with run metadata."""
        results["_run_id"] = self.metadata.run_id
        results["_created_at"] = self.metadata.created_at
        results["_completed_at"] = datetime.now().isoformat()

        with open(self.run_dir / "results.json", "w") as f:
            json.dump(results, f, indent=2)

    def save_image(self, image_data, name: str, format: str = "png") -> Path:
        """Save a Pillow image or uint8 array under images/.

        Raises:
            ValueError: If ``image_data`` is neither.
        """
        filepath = self.images_dir / f"{name}.{format}"

        if isinstance(image_data, np.ndarray):
            Image.fromarray(image_data.astype(np.uint8)).save(filepath)
        elif isinstance(image_data, Image.Image):
            image_data.save(filepath)
        else:
            raise ValueError(f"Unknown image type: {type(image_data)}")

        return filepath

    def complete(self, status: str = "completed", summary: Optional[Dict[str, Any]] = None):
        """Mark run as complete.

        Args:
            status: Final status (completed, failed, cancelled)
            summary: Optional summary of results
        """
        self.metadata.status = status
        self.metadata.completed_at = datetime.now().isoformat()
        if summary:
            self.metadata.summary = summary
        self._save_metadata()

    def __repr__(self) -> str:
        return f"Run({self.metadata.run_id}, status={self.metadata.status})"


class RunManager:
    """Creates run directories under a base output directory."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else Path("output")
        self.runs_dir = self.base_dir / "runs"
        self.runs_dir.mkdir(parents=True, exist_ok=True)

    def create_run(self, description: str, config: Optional[Dict[str, Any]] = None) -> Run:
        """Create a new run with a timestamped directory.

        Args:
            description: Short description (used in directory name)
            config: Configuration dictionary to save

        Returns:
            Run object for this run
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe_desc = description.replace(" ", "_").replace("/", "-")[:30]
        run_id = f"{timestamp}_{safe_desc}"

        run_dir = self.runs_dir / run_id
        suffix = 1
        while run_dir.exists():
            suffix += 1
            run_dir = self.runs_dir / f"{run_id}_{suffix}"
        run_id = run_dir.name

        run_dir.mkdir(parents=True)
        (run_dir / "images").mkdir()
        (run_dir / "logs").mkdir()

        metadata = RunMetadata(
            run_id=run_id,
            description=description,
            created_at=datetime.now().isoformat(),
            config=config,
        )

        run = Run(run_dir, metadata)
        run._save_metadata()
        if config:
            run.save_config(config)

        return run
