"""Settings for the narrative (LLM) collaborator.

Override by creating a NarrativeConfig with custom values:

    from tolstack.config import NarrativeConfig
    cfg = NarrativeConfig(model_id="gpt-4o", temperature=0.2)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

API_KEY_ENV = "OPENAI_API_KEY"


@dataclass
class NarrativeConfig:
    """Configuration for stack-up narrative generation.

    Attributes:
        api_key: API key; falls back to the OPENAI_API_KEY environment variable.
        model_id: Chat model to call.
        temperature: Sampling temperature.
        max_tokens: Response length cap.
        timeout: Request timeout in seconds.
    """
    api_key: Optional[str] = None
    model_id: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 1500
    timeout: float = 30.0

    def resolve_api_key(self) -> Optional[str]:
        return self.api_key or os.getenv(API_KEY_ENV)
