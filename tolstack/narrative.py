"""Plain-language review of a stack-up by a hosted language model.

The model only reads the numbers; nothing it returns feeds back into a
calculation. ``narrate_stackup`` never raises on service failure and
returns a fixed message instead.

Usage:
    from tolstack.narrative import narrate_stackup
    text = narrate_stackup(stack.dimensions, compute_stackup(stack.dimensions))
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from tolstack.config import API_KEY_ENV, NarrativeConfig
from tolstack.models import Dimension
from tolstack.stackup import StackupResult

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API Key is missing. Please check configuration."
FAILURE_MESSAGE = "Failed to generate AI analysis. Please try again later."
EMPTY_MESSAGE = "No analysis generated."

SYSTEM_PROMPT = (
    "You are a Senior Mechanical Engineer specializing in "
    "Tolerance Stackup Analysis (GD&T)."
)


class ServiceError(Exception):
    """The narrative service could not produce a response."""


class MissingAPIKeyError(ServiceError):
    """No API key was configured."""


def _num(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def _format_dimension(d: Dimension) -> str:
    desc = f"({d.description})" if d.description else ""
    return (f"- {d.name} {desc} [{d.direction.value}]: "
            f"Nom {_num(d.nominal)}, +{_num(d.tolerance_plus)}/-{_num(d.tolerance_minus)}")


def build_prompt(dimensions: Sequence[Dimension], result: StackupResult) -> str:
    """Describe the stack and its results as a review request."""
    dim_list = "\n".join(_format_dimension(d) for d in dimensions)
    return f"""Analyze the following tolerance stackup loop for an assembly.

**Context**:
We are calculating the gap/interference between components.
Positive Gap = Clearance (Good). Negative Gap = Interference (Bad, potentially).

**Stackup Data**:
{dim_list}

**Calculated Results**:
- Nominal Gap: {result.nominal_gap:.4f}
- Worst Case Range: [{result.worst_case_min:.4f}, {result.worst_case_max:.4f}]
- RSS (Statistical) Range: [{result.rss_min:.4f}, {result.rss_max:.4f}]
- Interference Probability (Est): {result.interference_probability_percent:.2f}%

**Task**:
1. **Evaluate the Risk**: Is this assembly safe for mass production?
2. **Identify Contributors**: Which dimension is the biggest contributor to the variation?
3. **Recommendations**: Suggest 3 specific engineering changes (e.g., change a specific tolerance, shift a nominal) to improve the design if there is interference or if the clearance is too tight.

Keep the response concise, professional, and actionable. Format with Markdown."""


class Summarizer(ABC):
    """Anything that turns a stack-up into prose."""

    @abstractmethod
    def summarize(self, dimensions: Sequence[Dimension], result: StackupResult) -> str:
        """Return review text, or raise ServiceError."""


class OpenAISummarizer(Summarizer):
    """Summarizer backed by the OpenAI chat completions API."""

    def __init__(self, config: Optional[NarrativeConfig] = None):
        self.config = config or NarrativeConfig()
        self._client = None

    def _get_client(self):
        """Lazy-load OpenAI client."""
        if self._client is None:
            api_key = self.config.resolve_api_key()
            if not api_key:
                raise MissingAPIKeyError(f"{API_KEY_ENV} is not set")
            try:
                from openai import OpenAI
                self._client = OpenAI(api_key=api_key, timeout=self.config.timeout)
            except Exception as e:
                raise ServiceError(f"Cannot create OpenAI client: {e}") from e
        return self._client

    def summarize(self, dimensions: Sequence[Dimension], result: StackupResult) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.config.model_id,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(dimensions, result)},
                ],
            )
        except Exception as e:
            raise ServiceError(str(e)) from e

        text = response.choices[0].message.content if response.choices else None
        return text or EMPTY_MESSAGE


def narrate_stackup(
    dimensions: Sequence[Dimension],
    result: StackupResult,
    summarizer: Optional[Summarizer] = None,
) -> str:
    """Ask the summarizer for a review; failures become a display string."""
    summarizer = summarizer or OpenAISummarizer()
    try:
        return summarizer.summarize(dimensions, result)
    except MissingAPIKeyError:
        logger.error("%s is missing from environment variables.", API_KEY_ENV)
        return MISSING_KEY_MESSAGE
    except ServiceError as e:
        logger.error("Narrative analysis error: %s", e)
        return FAILURE_MESSAGE
