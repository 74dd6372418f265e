"""Transmission gate — decides whether a staged set may leave, and in what form."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from stagesafe.admission.models import StagedFile
from stagesafe.gate.models import BackendStatus, Blocked, BlockReason, GateOutcome, Send
from stagesafe.redaction.engine import scan
from stagesafe.rules.registry import PatternCatalog

LOGGER = logging.getLogger(__name__)

SECRETS_DETECTED_MESSAGE = (
    "Potential secrets detected. Enable redaction or allow unredacted sending to proceed."
)

_BACKEND_BLOCKS: Dict[BackendStatus, tuple[BlockReason, str]] = {
    BackendStatus.MISSING_KEY: (
        BlockReason.BACKEND_MISSING_KEY,
        "Analysis backend is missing its API key. Set it in the server environment.",
    ),
    BackendStatus.OFFLINE: (
        BlockReason.BACKEND_OFFLINE,
        "Analysis backend is offline. Start the server and try again.",
    ),
    BackendStatus.CHECKING: (
        BlockReason.BACKEND_CHECKING,
        "Checking analysis backend status. Please retry in a moment.",
    ),
}


def check_preconditions(
    staged: List[StagedFile], backend: BackendStatus
) -> Optional[Blocked]:
    """Return a Blocked outcome if the attempt cannot start at all."""
    if not staged:
        return Blocked(BlockReason.NO_FILES, "No files staged for analysis.")
    if backend in _BACKEND_BLOCKS:
        reason, message = _BACKEND_BLOCKS[backend]
        return Blocked(reason, message)
    return None


def prepare(
    staged: List[StagedFile],
    redact_enabled: bool,
    allow_unredacted: bool,
    *,
    backend: BackendStatus = BackendStatus.READY,
    catalog: Optional[PatternCatalog] = None,
) -> GateOutcome:
    """Decide what, if anything, is handed to the analysis backend.

    The scan always runs once preconditions pass, so the summary is
    available even when redaction is off.
    """
    blocked = check_preconditions(staged, backend)
    if blocked is not None:
        return blocked

    result = scan(staged, catalog)
    summary = result.summary

    if redact_enabled:
        return Send(files=result.files, summary=summary, redacted=True)

    if summary.clean:
        return Send(files=list(staged), summary=summary, redacted=False)

    if not allow_unredacted:
        return Blocked(BlockReason.SECRETS_DETECTED, SECRETS_DETECTED_MESSAGE, summary)

    LOGGER.warning(
        "Sending %d file(s) unredacted despite %d secret-like match(es)",
        len(staged),
        summary.total_matches,
    )
    return Send(
        files=list(staged),
        summary=summary,
        redacted=False,
        unredacted_override=True,
    )
