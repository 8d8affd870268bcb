"""Data management package for the authenticity system.

Provides the schemas exchanged between pipeline stages:
- Extraction (ExtractedAttributes, tagged ExtractionResult)
- Web presence (PresenceResult)
- Verification (ScoreBreakdown, VerificationResult, VerificationFailure)

Verification results are not persisted; callers decide what to store.
"""

from authenticity_system.data_management.schemas import (
    ExtractionResult,
    PresenceResult,
    VerificationFailure,
    VerificationResult,
)

__all__ = [
    "ExtractionResult",
    "PresenceResult",
    "VerificationFailure",
    "VerificationResult",
]
