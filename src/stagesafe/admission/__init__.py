"""Admission layer — candidate models, controller, discovery."""

from stagesafe.admission.controller import (
    admit,
    decode_text,
    describe_outcome,
    is_ignored_path,
    is_sensitive_name,
)
from stagesafe.admission.discovery import discover
from stagesafe.admission.models import AdmissionOutcome, RawFile, SkipReason, StagedFile

__all__ = [
    "AdmissionOutcome",
    "RawFile",
    "SkipReason",
    "StagedFile",
    "admit",
    "decode_text",
    "describe_outcome",
    "discover",
    "is_ignored_path",
    "is_sensitive_name",
]
