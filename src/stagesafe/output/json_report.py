"""JSON reporter — the outbound payload plus its redaction summary."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from stagesafe.gate.models import Blocked, GateOutcome
from stagesafe.gate.payload import to_payload
from stagesafe.redaction.models import RedactionSummary


def summary_to_dict(summary: Optional[RedactionSummary]) -> Optional[Dict[str, Any]]:
    if summary is None:
        return None
    return {
        "total_matches": summary.total_matches,
        "files_with_matches": summary.files_with_matches,
        "patterns": sorted(summary.patterns),
    }


def to_dict(outcome: GateOutcome) -> Dict[str, Any]:
    """Convert a gate outcome to a JSON-serialisable dict."""
    if isinstance(outcome, Blocked):
        return {
            "version": "1.0",
            "status": "blocked",
            "reason": outcome.reason.value,
            "message": outcome.message,
            "redaction": summary_to_dict(outcome.summary),
            "files": [],
        }
    return {
        "version": "1.0",
        "status": "send",
        "redacted": outcome.redacted,
        "unredacted_override": outcome.unredacted_override,
        "redaction": summary_to_dict(outcome.summary),
        "files": to_payload(outcome),
    }


def render(outcome: GateOutcome) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(outcome), indent=2)
