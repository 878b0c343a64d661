"""Hole-pattern fit analysis for floating and fixed fasteners per ASME Y14.5.

Clearance is judged at maximum material condition: the largest fastener
in the smallest hole. The positional tolerance budget follows the
standard fastener formulas

    floating:  T = H_mmc - F_mmc            (each hole on its own)
    fixed:     T1 + T2 = H_mmc - F_mmc      (shared between both parts)

A separate misalignment check places the fastener at a given X/Y offset
and reports whether it would touch the wall of the first hole.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from tolstack.models import Misalignment, PartDimension, Unit
from tolstack.units import convert_misalignment, convert_part


class AssemblyMode(Enum):
    """Fastener arrangement."""
    FLOATING = "FLOATING"   # clearance holes in both plates
    FIXED = "FIXED"         # clearance hole in plate 1, threaded/pressed in plate 2


class FitStatus(Enum):
    """Drawing-compliance verdict of a hole pattern."""
    SAFE = "SAFE"
    FAIL = "FAIL"


def pin_mmc(pin: PartDimension) -> float:
    """Largest the fastener can be."""
    return pin.nominal + pin.tol_plus


def hole_mmc(hole: PartDimension) -> float:
    """Smallest the hole can be."""
    return hole.nominal - hole.tol_minus


@dataclass
class FitAnalysis:
    """Results of a hole-pattern fit analysis.

    Attributes:
        pin_mmc: Fastener diameter at MMC.
        hole1_mmc: Plate 1 hole diameter at MMC.
        hole2_mmc: Plate 2 hole diameter at MMC (reported only).
        max_allowable_position_tolerance: Largest position tolerance the
            geometry allows per feature.
        status: SAFE if the drawing callouts fit the budget.
        recommendation: Templated advice text.
        clearance: Binding clearance (floating) or total budget (fixed).
        actual_radial_offset: Distance of the simulated fastener axis from
            true position.
        actual_true_position_diameter: Diametral true position of the
            simulated offset.
        radial_clearance: Radial gap between fastener and hole 1 at MMC.
        is_simulated_interference: Whether the simulated offset makes the
            fastener touch hole 1.
    """
    pin_mmc: float
    hole1_mmc: float
    hole2_mmc: float
    max_allowable_position_tolerance: float
    status: FitStatus
    recommendation: str
    clearance: float
    actual_radial_offset: float
    actual_true_position_diameter: float
    radial_clearance: float
    is_simulated_interference: bool

    def summary(self) -> str:
        lines = [
            "=== Hole Pattern Fit ===",
            f"  Fastener MMC:     {self.pin_mmc:.4f}",
            f"  Hole 1 MMC:       {self.hole1_mmc:.4f}",
            f"  Hole 2 MMC:       {self.hole2_mmc:.4f}",
            f"  Max allowable TP: {self.max_allowable_position_tolerance:.4f}",
            f"  Status:           {self.status.value}",
            "  Simulation:",
            f"    Radial offset:  {self.actual_radial_offset:.4f}",
            f"    Actual TP:      {self.actual_true_position_diameter:.4f}",
            f"    Radial clear.:  {self.radial_clearance:.4f}",
            f"    Interference:   {'yes' if self.is_simulated_interference else 'no'}",
        ]
        lines.extend(f"  {line}" for line in self.recommendation.splitlines())
        return "\n".join(lines)


def compute_fit(
    pin: PartDimension,
    hole1: PartDimension,
    hole2: PartDimension,
    mode: AssemblyMode,
    deviation: Misalignment,
    unit: Unit = Unit.MM,
) -> FitAnalysis:
    """Analyze a fastener passing through two holes.

    Args:
        pin: Fastener size (its position spec is ignored).
        hole1: Clearance hole in plate 1.
        hole2: Hole in plate 2; threaded in FIXED mode.
        mode: FLOATING or FIXED.
        deviation: Simulated fastener offset from hole 1's axis.
        unit: Unit label used in the recommendation text.

    Returns:
        FitAnalysis. Negative clearances are reported, never rejected.
    """
    f_mmc = pin_mmc(pin)
    h1_mmc = hole_mmc(hole1)
    h2_mmc = hole_mmc(hole2)
    label = unit.value
    status = FitStatus.SAFE

    if mode is AssemblyMode.FLOATING:
        clearance1 = h1_mmc - f_mmc
        clearance2 = h2_mmc - f_mmc
        clearance = min(clearance1, clearance2)
        max_tp = clearance

        # each hole against its own clearance
        if (hole1.position_tolerance_spec > clearance1
                or hole2.position_tolerance_spec > clearance2):
            status = FitStatus.FAIL

        current_spec = max(hole1.position_tolerance_spec, hole2.position_tolerance_spec)
        recommendation = (
            f"Ideally, Position Tolerance should be ≤ {clearance:.4f} {label}. \n"
            f"Currently spec is {current_spec:.4f} {label}."
        )
    elif mode is AssemblyMode.FIXED:
        # hole 2 is threaded: only hole 1 offers clearance
        clearance = h1_mmc - f_mmc
        max_tp = clearance / 2

        combined_spec = hole1.position_tolerance_spec + hole2.position_tolerance_spec
        if combined_spec > clearance:
            status = FitStatus.FAIL

        recommendation = (
            "For Fixed Fasteners, the total clearance is shared.\n"
            f"Max recommended TP per part is {clearance / 2:.4f} {label}."
        )
    else:
        raise ValueError(f"Unknown assembly mode: {mode!r}")

    actual_offset = float(np.sqrt(deviation.x ** 2 + deviation.y ** 2))
    radial_clearance = (h1_mmc - f_mmc) / 2

    return FitAnalysis(
        pin_mmc=f_mmc,
        hole1_mmc=h1_mmc,
        hole2_mmc=h2_mmc,
        max_allowable_position_tolerance=max_tp,
        status=status,
        recommendation=recommendation,
        clearance=clearance,
        actual_radial_offset=actual_offset,
        actual_true_position_diameter=2 * actual_offset,
        radial_clearance=radial_clearance,
        is_simulated_interference=actual_offset > radial_clearance,
    )


@dataclass
class HoleFitSetup:
    """Complete input bundle for a hole-fit analysis.

    Attributes:
        pin: Fastener.
        hole1: Plate 1 hole.
        hole2: Plate 2 hole.
        mode: Fastener arrangement.
        deviation: Simulated fastener offset.
        unit: Unit all lengths are expressed in.
        name: Optional label.
    """
    pin: PartDimension
    hole1: PartDimension
    hole2: PartDimension
    mode: AssemblyMode = AssemblyMode.FLOATING
    deviation: Misalignment = field(default_factory=Misalignment)
    unit: Unit = Unit.MM
    name: str = ""

    def analyze(self) -> FitAnalysis:
        return compute_fit(self.pin, self.hole1, self.hole2, self.mode,
                           self.deviation, unit=self.unit)

    def convert(self, target: Unit) -> HoleFitSetup:
        """Return a copy expressed in ``target`` units (lossy, see tolstack.units)."""
        return HoleFitSetup(
            pin=convert_part(self.pin, self.unit, target),
            hole1=convert_part(self.hole1, self.unit, target),
            hole2=convert_part(self.hole2, self.unit, target),
            mode=self.mode,
            deviation=convert_misalignment(self.deviation, self.unit, target),
            unit=target,
            name=self.name,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "unit": self.unit.value,
            "mode": self.mode.value,
            "pin": self.pin.to_dict(),
            "hole1": self.hole1.to_dict(),
            "hole2": self.hole2.to_dict(),
            "deviation": self.deviation.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> HoleFitSetup:
        return cls(
            pin=PartDimension.from_dict(d["pin"]),
            hole1=PartDimension.from_dict(d["hole1"]),
            hole2=PartDimension.from_dict(d["hole2"]),
            mode=AssemblyMode(d.get("mode", "FLOATING")),
            deviation=Misalignment.from_dict(d.get("deviation", {})),
            unit=Unit(d.get("unit", "MM")),
            name=d.get("name", ""),
        )
