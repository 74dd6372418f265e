"""Transmission gate — send/block decision and outbound payload."""

from stagesafe.gate.gate import SECRETS_DETECTED_MESSAGE, check_preconditions, prepare
from stagesafe.gate.models import BackendStatus, Blocked, BlockReason, GateOutcome, Send
from stagesafe.gate.payload import PayloadError, render_bundle, to_payload, validate_payload

__all__ = [
    "BackendStatus",
    "BlockReason",
    "Blocked",
    "GateOutcome",
    "PayloadError",
    "SECRETS_DETECTED_MESSAGE",
    "Send",
    "check_preconditions",
    "prepare",
    "render_bundle",
    "to_payload",
    "validate_payload",
]
