"""Transmission gate outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from stagesafe.admission.models import StagedFile
from stagesafe.redaction.models import RedactionSummary


class BackendStatus(str, Enum):
    """Liveness/credential state of the analysis backend, as reported by the caller."""

    READY = "ready"
    MISSING_KEY = "missing-key"
    OFFLINE = "offline"
    CHECKING = "checking"


class BlockReason(str, Enum):
    NO_FILES = "no_files"
    BACKEND_MISSING_KEY = "backend_missing_key"
    BACKEND_OFFLINE = "backend_offline"
    BACKEND_CHECKING = "backend_checking"
    SECRETS_DETECTED = "secrets_detected"


@dataclass(frozen=True)
class Send:
    """Files cleared for handoff, as one complete set."""

    files: List[StagedFile]
    summary: RedactionSummary
    redacted: bool
    unredacted_override: bool = False  # secrets found and sent anyway


@dataclass(frozen=True)
class Blocked:
    """A normal terminal state of one analyze attempt."""

    reason: BlockReason
    message: str
    summary: Optional[RedactionSummary] = None  # set once the scan has run


GateOutcome = Union[Send, Blocked]
