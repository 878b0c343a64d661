"""Tolerance Stack-up and Hole-Fit Analysis Tool.

Supports two calculation engines:
- Linear 1D tolerance stacks: nominal, Worst-Case and RSS gap bounds with
  a normal-model interference probability
- GD&T hole-pattern fit for floating and fixed fasteners: MMC boundaries,
  allowable position tolerance and a misalignment simulation

Additional capabilities:
- Lossy millimetre / inch conversion of hole-fit inputs
- Monte Carlo cross-check and percent contribution of each dimension
- Excel (SpreadsheetML) export with live formulas
- Language-model engineering review of a stack
- Matplotlib / Plotly charts and a Streamlit GUI
"""

from tolstack.models import (
    Dimension, DimensionType, ToleranceStack,
    PartDimension, Misalignment, Unit,
)
from tolstack.statistics import (
    normal_tail, normal_cdf, interference_probability,
    bell_curve, percent_contribution,
)
from tolstack.stackup import (
    StackupResult, StackStatus, compute_stackup, stackup_status,
    status_message, MonteCarloResult, monte_carlo_stackup,
)
from tolstack.holefit import (
    AssemblyMode, FitStatus, FitAnalysis, HoleFitSetup, compute_fit,
)
from tolstack.units import convert_value, convert_part, convert_misalignment
from tolstack.export import generate_spreadsheet_xml, save_spreadsheet
from tolstack.narrative import (
    ServiceError, MissingAPIKeyError, Summarizer, OpenAISummarizer,
    build_prompt, narrate_stackup,
)

__all__ = [
    # Core models
    "Dimension", "DimensionType", "ToleranceStack",
    "PartDimension", "Misalignment", "Unit",
    # Statistics
    "normal_tail", "normal_cdf", "interference_probability",
    "bell_curve", "percent_contribution",
    # Linear stack-up
    "StackupResult", "StackStatus", "compute_stackup", "stackup_status",
    "status_message", "MonteCarloResult", "monte_carlo_stackup",
    # Hole fit
    "AssemblyMode", "FitStatus", "FitAnalysis", "HoleFitSetup", "compute_fit",
    # Units
    "convert_value", "convert_part", "convert_misalignment",
    # Export
    "generate_spreadsheet_xml", "save_spreadsheet",
    # Narrative
    "ServiceError", "MissingAPIKeyError", "Summarizer", "OpenAISummarizer",
    "build_prompt", "narrate_stackup",
]
__version__ = "0.1.0"
