"""Redaction engine, summary models, and placeholders."""

from stagesafe.redaction.engine import describe_summary, redact_text, scan
from stagesafe.redaction.models import RedactionSummary, ScanOutcome
from stagesafe.redaction.placeholder import label_for, placeholder_for

__all__ = [
    "RedactionSummary",
    "ScanOutcome",
    "describe_summary",
    "label_for",
    "placeholder_for",
    "redact_text",
    "scan",
]
