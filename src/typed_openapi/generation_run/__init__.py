"""Generation run domain exports."""

from .generation_contracts import GenerationArtifacts, GenerationOutcome, GenerationRequest
from .generation_use_case import GenerationRunError, execute_generation_run

__all__ = [
    "GenerationRequest",
    "GenerationOutcome",
    "GenerationArtifacts",
    "GenerationRunError",
    "execute_generation_run",
]
