"""Phenotypes: how a gene is interpreted as a drawable primitive.

Every gene starts with an activation flag. The remaining values are read
according to the phenotype:

    lines:   flag, x1, y1, x2, y2, red, green, blue, alpha
    bezier:  flag, from_x, from_y, to_x, to_y, control_x, control_y
    dots:    flag, x, y, red, green, blue, alpha
    circles: flag, radius, x, y, red, green, blue, alpha
    mixed:   flag, selector, payload (8 values)

A mixed gene picks one of the four concrete phenotypes from its selector
value and hands the flag plus the leading payload values to that
phenotype's drawing rule.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class Phenotype(Enum):
    """Rendering style applied to every gene of an individual."""

    LINES = "lines"
    BEZIER = "bezier"
    DOTS = "dots"
    CIRCLES = "circles"
    MIXED = "mixed"

    @property
    def gene_length(self) -> int:
        """Number of values a gene needs for this phenotype."""
        return GENE_LENGTH[self]

    @classmethod
    def parse(cls, tag: Union[str, "Phenotype"]) -> "Phenotype":
        """Resolve a phenotype from its tag.

        Raises:
            ValueError: If the tag is not one of the known phenotypes.
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown phenotype '{tag}'. Available: {valid}") from None

    @staticmethod
    def for_selector(value: float) -> "Phenotype":
        """Concrete phenotype chosen by a mixed gene's selector value."""
        for upper, phenotype in MIXED_BANDS:
            if value < upper:
                return phenotype
        return Phenotype.CIRCLES


GENE_LENGTH = {
    Phenotype.LINES: 9,
    Phenotype.BEZIER: 7,
    Phenotype.DOTS: 7,
    Phenotype.CIRCLES: 8,
    Phenotype.MIXED: 10,
}

# Four equal selector bands, upper bound exclusive
MIXED_BANDS = (
    (0.25, Phenotype.LINES),
    (0.5, Phenotype.BEZIER),
    (0.75, Phenotype.DOTS),
    (1.0, Phenotype.CIRCLES),
)
