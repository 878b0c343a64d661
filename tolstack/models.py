"""Data models for linear stack-ups and hole-pattern fits."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from enum import Enum


def _new_id() -> str:
    return uuid.uuid4().hex[:9]


class DimensionType(Enum):
    """Whether a dimension opens or closes the gap."""
    INCREASING = "INCREASING"   # adds to the gap (e.g. housing depth)
    DECREASING = "DECREASING"   # subtracts from the gap (e.g. PCB thickness)


class Unit(Enum):
    """Linear unit of a hole-fit analysis."""
    MM = "MM"
    INCH = "INCH"


@dataclass
class Dimension:
    """A single contributor in a linear tolerance stack.

    Tolerances are magnitudes: ``tolerance_minus`` is subtracted from the
    nominal to get the smallest size. Neither is checked for sign.

    Attributes:
        name: Descriptive name for this dimension.
        nominal: Nominal dimension value.
        tolerance_plus: Upper tolerance.
        tolerance_minus: Lower tolerance (positive value, will be subtracted).
        direction: INCREASING or DECREASING.
        description: Optional free text, display only.
        id: Opaque identifier used by editors to track rows.
    """
    name: str
    nominal: float
    tolerance_plus: float
    tolerance_minus: float
    direction: DimensionType = DimensionType.INCREASING
    description: str = ""
    id: str = field(default_factory=_new_id)

    @property
    def max_size(self) -> float:
        return self.nominal + self.tolerance_plus

    @property
    def min_size(self) -> float:
        return self.nominal - self.tolerance_minus

    @property
    def half_tolerance(self) -> float:
        """Symmetrized tolerance used for RSS."""
        return (self.tolerance_plus + self.tolerance_minus) / 2.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "nominal": self.nominal,
            "tolerance_plus": self.tolerance_plus,
            "tolerance_minus": self.tolerance_minus,
            "direction": self.direction.value,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Dimension:
        return cls(
            name=d["name"],
            nominal=float(d["nominal"]),
            tolerance_plus=float(d["tolerance_plus"]),
            tolerance_minus=float(d["tolerance_minus"]),
            direction=DimensionType(d.get("direction", "INCREASING")),
            description=d.get("description", ""),
            id=d.get("id") or _new_id(),
        )


@dataclass
class ToleranceStack:
    """An ordered chain of dimensions closing on one gap.

    Attributes:
        name: Descriptive name for the stack.
        dimensions: Dimensions in loop order.
        description: Optional longer description.
    """
    name: str
    dimensions: list[Dimension] = field(default_factory=list)
    description: str = ""

    def add(self, dimension: Dimension) -> None:
        """Append a dimension to the end of the chain."""
        self.dimensions.append(dimension)

    def remove(self, dimension_id: str) -> None:
        """Drop the dimension with the given id (no-op if absent)."""
        self.dimensions = [d for d in self.dimensions if d.id != dimension_id]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "dimensions": [d.to_dict() for d in self.dimensions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> ToleranceStack:
        stack = cls(name=data["name"], description=data.get("description", ""))
        for d in data.get("dimensions", []):
            stack.add(Dimension.from_dict(d))
        return stack

    def save(self, path: str) -> None:
        """Save the stack definition to a JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> ToleranceStack:
        """Load a stack definition from a JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))


@dataclass
class PartDimension:
    """Size and position callout of a pin or hole.

    Attributes:
        nominal: Nominal diameter.
        tol_plus: Plus size tolerance.
        tol_minus: Minus size tolerance (positive value).
        position_tolerance_spec: Diametral true-position tolerance on the
            drawing. Zero for the fastener.
    """
    nominal: float
    tol_plus: float = 0.0
    tol_minus: float = 0.0
    position_tolerance_spec: float = 0.0

    def to_dict(self) -> dict:
        return {
            "nominal": self.nominal,
            "tol_plus": self.tol_plus,
            "tol_minus": self.tol_minus,
            "position_tolerance_spec": self.position_tolerance_spec,
        }

    @classmethod
    def from_dict(cls, d: dict) -> PartDimension:
        return cls(
            nominal=float(d["nominal"]),
            tol_plus=float(d.get("tol_plus", 0.0)),
            tol_minus=float(d.get("tol_minus", 0.0)),
            position_tolerance_spec=float(d.get("position_tolerance_spec", 0.0)),
        )


@dataclass
class Misalignment:
    """Offset of the fastener axis from the hole axis."""
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, d: dict) -> Misalignment:
        return cls(x=float(d.get("x", 0.0)), y=float(d.get("y", 0.0)))
