"""Redaction result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List

from stagesafe.admission.models import StagedFile


@dataclass(frozen=True)
class RedactionSummary:
    """Aggregate result of one redaction pass over a file set."""

    total_matches: int = 0
    files_with_matches: int = 0
    patterns: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def clean(self) -> bool:
        return self.total_matches == 0


@dataclass(frozen=True)
class ScanOutcome:
    """Redacted copies of the input files plus the pass summary."""

    files: List[StagedFile]
    summary: RedactionSummary
