"""Redaction engine — replaces catalog matches with typed placeholders.

The pass is pure: input files are never modified, and every returned
file is a new value even when nothing matched.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from typing import Iterable, List, Optional, Set

from stagesafe.admission.models import StagedFile
from stagesafe.redaction.models import RedactionSummary, ScanOutcome
from stagesafe.redaction.placeholder import PLACEHOLDER_RE, placeholder_for
from stagesafe.rules.registry import PatternCatalog, default_catalog

LOGGER = logging.getLogger(__name__)


def _subn_outside(
    regex: re.Pattern[str], replacement: str, text: str
) -> tuple[str, int]:
    """``regex.subn`` that leaves any match touching a placeholder alone."""
    protected = [m.span() for m in PLACEHOLDER_RE.finditer(text)]
    if not protected:
        return regex.subn(replacement, text)

    hits = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal hits
        start, end = match.span()
        if any(start < p_end and p_start < end for p_start, p_end in protected):
            return match.group(0)
        hits += 1
        return replacement

    return regex.sub(replace, text), hits


def redact_text(text: str, catalog: PatternCatalog) -> tuple[str, int, Set[str]]:
    """Run every enabled pattern over *text* in catalog order.

    Later patterns see the output of earlier ones. A match that overlaps
    an existing placeholder is left as is, so redacted output never
    yields new matches when scanned again.
    Returns (redacted text, match count, names of patterns that fired).
    """
    count = 0
    fired: Set[str] = set()
    for pattern in catalog.enabled_patterns():
        text, hits = _subn_outside(
            pattern.compiled_pattern, placeholder_for(pattern.name), text
        )
        if hits:
            count += hits
            fired.add(pattern.name)
    return text, count, fired


def scan(
    files: Iterable[StagedFile],
    catalog: Optional[PatternCatalog] = None,
) -> ScanOutcome:
    """Redact every file and aggregate match counts."""
    if catalog is None:
        catalog = default_catalog()

    redacted: List[StagedFile] = []
    total_matches = 0
    files_with_matches = 0
    patterns: Set[str] = set()

    for file in files:
        content, hits, fired = redact_text(file.content, catalog)
        if hits:
            total_matches += hits
            files_with_matches += 1
            patterns.update(fired)
            LOGGER.debug(
                "Redacted %d match(es) in %s (%s)",
                hits, file.path, ", ".join(sorted(fired)),
            )
        redacted.append(dataclasses.replace(file, content=content))

    return ScanOutcome(
        files=redacted,
        summary=RedactionSummary(
            total_matches=total_matches,
            files_with_matches=files_with_matches,
            patterns=frozenset(patterns),
        ),
    )


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n > 1 else ''}"


def describe_summary(summary: RedactionSummary) -> Optional[str]:
    """User notification for a redaction pass, or None when nothing matched."""
    if summary.clean:
        return None
    return (
        f"Redacted {_plural(summary.total_matches, 'secret-like string')} "
        f"in {_plural(summary.files_with_matches, 'file')}"
    )
