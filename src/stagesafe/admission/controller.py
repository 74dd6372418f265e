"""Admission controller — decides which candidates join the staged set.

Checks run per candidate in a fixed order and stop at the first failure:

    ignored path → sensitive name → duplicate → count limit
    → single-file size → aggregate size → binary content

The order decides which counter a multiply-disqualified file lands in,
and keeps the read/decode step behind every cheap check. Hitting either
limit ends the batch; nothing after it is evaluated.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Optional, Union

from stagesafe.admission.models import (
    AdmissionOutcome,
    RawFile,
    SkipReason,
    StagedFile,
)
from stagesafe.config.schema import AdmissionPolicy

LOGGER = logging.getLogger(__name__)


def is_ignored_path(path: str, segments: Iterable[str]) -> bool:
    """True if *path* contains any segment as a whole path component."""
    lower = path.lower()
    for segment in segments:
        seg = segment.lower()
        if (
            f"/{seg}/" in lower
            or f"\\{seg}\\" in lower
            or lower.startswith(f"{seg}/")
        ):
            return True
    return False


def is_sensitive_name(name: str, policy: AdmissionPolicy) -> bool:
    return any(p.search(name) for p in policy.compiled_sensitive)


def decode_text(raw: Union[bytes, str]) -> Optional[str]:
    """Decode *raw* as UTF-8; None if it looks binary."""
    if isinstance(raw, str):
        text = raw
    else:
        text = raw.decode("utf-8-sig", errors="replace")
    if "\ufffd" in text or "\x00" in text:
        return None
    return text


def _read_text(candidate: RawFile) -> Union[str, SkipReason]:
    """Decoded content, or the reason the candidate cannot be staged."""
    try:
        raw = candidate.read()
    except OSError as exc:
        LOGGER.debug("Could not read %s: %s", candidate.path, exc)
        return SkipReason.BINARY
    if isinstance(raw, bytes) and len(raw) > candidate.size:
        LOGGER.debug("%s grew past its declared %d bytes", candidate.path, candidate.size)
        return SkipReason.LARGE
    try:
        text = decode_text(raw)
    except UnicodeError as exc:
        LOGGER.debug("Could not decode %s: %s", candidate.path, exc)
        return SkipReason.BINARY
    return SkipReason.BINARY if text is None else text


def admit(
    candidates: Iterable[RawFile],
    existing_paths: AbstractSet[str],
    existing_total_size: int,
    policy: Optional[AdmissionPolicy] = None,
) -> AdmissionOutcome:
    """Admit *candidates* against the current staged set. Never raises for
    rejected files; every rejection is a counter on the outcome."""
    policy = policy or AdmissionPolicy()
    outcome = AdmissionOutcome()
    seen = set(existing_paths)
    existing_count = len(existing_paths)
    running_total = existing_total_size

    def skip(candidate: RawFile, reason: SkipReason) -> None:
        outcome.record(reason)
        LOGGER.debug("Skipped %s (%s)", candidate.path, reason.value)

    for candidate in candidates:
        if is_ignored_path(candidate.path, policy.ignored_segments):
            skip(candidate, SkipReason.IGNORED)
            continue

        if not policy.allow_sensitive and is_sensitive_name(candidate.name, policy):
            skip(candidate, SkipReason.SENSITIVE)
            continue

        if candidate.path in seen:
            skip(candidate, SkipReason.DUPLICATE)
            continue

        if existing_count + len(outcome.accepted) >= policy.max_file_count:
            outcome.limit_reached = True
            LOGGER.debug(
                "File count limit %d reached at %s", policy.max_file_count, candidate.path
            )
            break

        if candidate.size > policy.max_file_size_bytes:
            skip(candidate, SkipReason.LARGE)
            continue

        if running_total + candidate.size > policy.max_total_size_bytes:
            outcome.limit_reached = True
            LOGGER.debug(
                "Total size limit %d reached at %s", policy.max_total_size_bytes, candidate.path
            )
            break

        text = _read_text(candidate)
        if isinstance(text, SkipReason):
            skip(candidate, text)
            continue

        outcome.accepted.append(
            StagedFile(
                name=candidate.name,
                path=candidate.path,
                content=text,
                size=candidate.size,
            )
        )
        seen.add(candidate.path)
        running_total += candidate.size

    LOGGER.info(
        "Admitted %d file(s), skipped %d%s",
        len(outcome.accepted),
        outcome.total_skipped,
        " (limit reached)" if outcome.limit_reached else "",
    )
    return outcome


_SKIP_LABELS: List[tuple[str, str]] = [
    ("skipped_ignored", "ignored"),
    ("skipped_sensitive", "sensitive"),
    ("skipped_large", "large"),
    ("skipped_duplicate", "duplicate"),
    ("skipped_binary", "binary-looking"),
]


def describe_outcome(outcome: AdmissionOutcome) -> Optional[str]:
    """One-line notification listing every non-zero skip reason."""
    messages: List[str] = []
    for attr, label in _SKIP_LABELS:
        n = getattr(outcome, attr)
        if n:
            messages.append(f"Skipped {n} {label} file{'s' if n > 1 else ''}")
    if outcome.limit_reached:
        messages.append("File limit reached")
    return " | ".join(messages) if messages else None
