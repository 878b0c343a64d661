"""Built-in example stacks and hole patterns for demonstration."""

from __future__ import annotations

from tolstack.holefit import AssemblyMode, HoleFitSetup
from tolstack.models import (
    Dimension, DimensionType, Misalignment, PartDimension, ToleranceStack, Unit,
)

INC = DimensionType.INCREASING
DEC = DimensionType.DECREASING


def default_stack() -> ToleranceStack:
    """Battery pocket in an electronics enclosure.

    Dimension loop:
        +Housing cavity depth
        -PCB thickness
        -Standoff height
        -Battery thickness
        = Gap above the battery
    """
    return ToleranceStack(
        name="Battery Pocket",
        description="Clearance above a LiPo cell",
        dimensions=[
            Dimension("Housing Cavity Depth", 20.00, 0.2, 0.2, INC,
                      description="Main enclosure depth", id="1"),
            Dimension("PCB Thickness", 1.60, 0.1, 0.1, DEC,
                      description="FR4 Board", id="2"),
            Dimension("Standoff Height", 5.00, 0.05, 0.05, DEC,
                      description="Metal standoff", id="3"),
            Dimension("Battery Thickness", 12.50, 0.3, 0.1, DEC,
                      description="LiPo Pouch cell", id="4"),
        ],
    )


def create_enclosure_example() -> ToleranceStack:
    """Heatsink stack inside a machined case."""
    return ToleranceStack(
        name="Enclosure Assembly",
        dimensions=[
            Dimension("Housing Cavity", 25.00, 0.15, 0.15, INC,
                      description="Machined Aluminum Case"),
            Dimension("PCB Stack", 3.20, 0.2, 0.2, DEC,
                      description="Mainboard + Daughterboard"),
            Dimension("Spacer", 8.00, 0.1, 0.1, DEC,
                      description="Nylon Spacer"),
            Dimension("Heatsink", 12.50, 0.3, 0.1, DEC,
                      description="Extruded Aluminum"),
            Dimension("Thermal Pad", 1.00, 0.2, 0.1, DEC,
                      description="Gap Filler (Compressed)"),
        ],
    )


def create_oring_example() -> ToleranceStack:
    """O-ring in a piston groove.

    Here a negative gap is squeeze, which is what the design wants.
    """
    return ToleranceStack(
        name="O-Ring Compression",
        dimensions=[
            Dimension("Groove Depth", 3.40, 0.05, 0.05, INC,
                      description="Piston groove depth"),
            Dimension("O-Ring Cross Section", 4.00, 0.10, 0.10, DEC,
                      description="Standard size -126"),
        ],
    )


def create_button_example() -> ToleranceStack:
    """Pre-travel of a front-panel button over a tact switch."""
    return ToleranceStack(
        name="Button Tactile Travel",
        dimensions=[
            Dimension("Housing Face to PCB", 8.50, 0.15, 0.15, INC,
                      description="Distance from PCB mount to front face"),
            Dimension("Switch Height", 3.50, 0.1, 0.1, DEC,
                      description="Tact switch unpressed height"),
            Dimension("Button Actuator", 4.80, 0.05, 0.05, DEC,
                      description="Plastic button rib length"),
        ],
    )


STACK_EXAMPLES = {
    "default": default_stack,
    "enclosure": create_enclosure_example,
    "oring": create_oring_example,
    "button": create_button_example,
}


def create_stack(key: str) -> ToleranceStack:
    """Build a fresh copy of a named example stack."""
    try:
        factory = STACK_EXAMPLES[key]
    except KeyError:
        raise ValueError(
            f"Unknown stack example {key!r}; choose from {sorted(STACK_EXAMPLES)}"
        ) from None
    return factory()


# ---------------------------------------------------------------------------
# Hole patterns
# ---------------------------------------------------------------------------

def default_hole_setup() -> HoleFitSetup:
    """M6 floating fastener with a small simulated offset."""
    return HoleFitSetup(
        name="Default",
        unit=Unit.MM,
        mode=AssemblyMode.FLOATING,
        pin=PartDimension(6.00, 0.00, 0.1, 0.0),
        hole1=PartDimension(6.60, 0.2, 0.0, 0.5),
        hole2=PartDimension(6.60, 0.2, 0.0, 0.5),
        deviation=Misalignment(0.1, 0.1),
    )


def _m6_float() -> HoleFitSetup:
    return HoleFitSetup(
        name="M6 Floating Fastener (Metric)",
        unit=Unit.MM,
        mode=AssemblyMode.FLOATING,
        pin=PartDimension(6.00, 0.00, 0.10, 0.0),
        hole1=PartDimension(6.60, 0.20, 0.00, 0.50),
        hole2=PartDimension(6.60, 0.20, 0.00, 0.50),
    )


def _m8_fixed() -> HoleFitSetup:
    return HoleFitSetup(
        name="M8 Fixed/Threaded (Metric)",
        unit=Unit.MM,
        mode=AssemblyMode.FIXED,
        pin=PartDimension(8.00, 0.00, 0.15, 0.0),
        hole1=PartDimension(9.00, 0.25, 0.00, 0.40),
        hole2=PartDimension(8.00, 0.00, 0.00, 0.40),  # nominal thread
    )


def _quarter_inch() -> HoleFitSetup:
    return HoleFitSetup(
        name="1/4-20 Bolt (Inch)",
        unit=Unit.INCH,
        mode=AssemblyMode.FLOATING,
        pin=PartDimension(0.250, 0.000, 0.005, 0.0),
        hole1=PartDimension(0.266, 0.010, 0.000, 0.015),
        hole2=PartDimension(0.266, 0.010, 0.000, 0.015),
    )


HOLE_SCENARIOS = {
    "m6_float": _m6_float,
    "m8_fixed": _m8_fixed,
    "quarter_inch": _quarter_inch,
}


def create_hole_setup(key: str) -> HoleFitSetup:
    """Build a named hole pattern with the simulated offset reset to zero."""
    try:
        factory = HOLE_SCENARIOS[key]
    except KeyError:
        raise ValueError(
            f"Unknown hole scenario {key!r}; choose from {sorted(HOLE_SCENARIOS)}"
        ) from None
    return factory()
