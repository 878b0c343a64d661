"""Millimetre / inch conversion for hole-fit inputs.

Every converted value is rounded straight away (3 places for mm, 4 for
inch), so toggling back and forth drifts. Displayed values match what an
operator typing the rounded figures would see.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from tolstack.models import Misalignment, PartDimension, Unit

MM_PER_INCH = 25.4

PRECISION = {
    Unit.MM: 3,
    Unit.INCH: 4,
}


def round_half_up(value: float, places: int) -> float:
    """Round half away from zero on the exact binary value, like a fixed-point display.

    Non-finite values are returned untouched.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(value)
    context = Context(prec=max(64, exact.adjusted() + places + 2))
    return float(exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP,
                                context=context))


def convert_value(value: float, source: Unit, target: Unit) -> float:
    """Convert one length between units, rounding to the target's precision.

    Values are returned untouched when the units already match.
    """
    if source is target:
        return value
    if target is Unit.MM:
        factor = MM_PER_INCH
    elif target is Unit.INCH:
        factor = 1 / MM_PER_INCH
    else:
        raise ValueError(f"Unknown unit: {target!r}")
    return round_half_up(value * factor, PRECISION[target])


def convert_part(part: PartDimension, source: Unit, target: Unit) -> PartDimension:
    """Return a copy of ``part`` with every field in ``target`` units."""
    return PartDimension(
        nominal=convert_value(part.nominal, source, target),
        tol_plus=convert_value(part.tol_plus, source, target),
        tol_minus=convert_value(part.tol_minus, source, target),
        position_tolerance_spec=convert_value(part.position_tolerance_spec, source, target),
    )


def convert_misalignment(deviation: Misalignment, source: Unit, target: Unit) -> Misalignment:
    """Return a copy of ``deviation`` in ``target`` units."""
    return Misalignment(
        x=convert_value(deviation.x, source, target),
        y=convert_value(deviation.y, source, target),
    )
