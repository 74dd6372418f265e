"""Staging session — the single owner of a staged file set.

Wraps the pure ``admit`` / ``prepare`` functions with the state a caller
keeps between them: the staged files and the last redaction summary.
"""

from __future__ import annotations

import threading
from typing import Iterable, List, Optional

from stagesafe.admission.controller import admit
from stagesafe.admission.models import AdmissionOutcome, RawFile, StagedFile
from stagesafe.config.schema import AdmissionPolicy
from stagesafe.gate.gate import prepare
from stagesafe.gate.models import BackendStatus, GateOutcome
from stagesafe.redaction.models import RedactionSummary
from stagesafe.rules.registry import PatternCatalog


class SessionBusyError(RuntimeError):
    """Raised when an analyze attempt starts while another is in flight."""


class StagingSession:
    def __init__(
        self,
        policy: Optional[AdmissionPolicy] = None,
        catalog: Optional[PatternCatalog] = None,
    ) -> None:
        self.policy = policy or AdmissionPolicy()
        self.catalog = catalog
        self._files: List[StagedFile] = []
        self._last_summary: Optional[RedactionSummary] = None
        self._analyze_lock = threading.Lock()

    # ---- staged set ----

    @property
    def files(self) -> List[StagedFile]:
        return list(self._files)

    @property
    def paths(self) -> set[str]:
        return {f.path for f in self._files}

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self._files)

    @property
    def last_summary(self) -> Optional[RedactionSummary]:
        return self._last_summary

    def __len__(self) -> int:
        return len(self._files)

    def add(self, candidates: Iterable[RawFile]) -> AdmissionOutcome:
        """Admit a batch and merge whatever was accepted."""
        outcome = admit(candidates, self.paths, self.total_size, self.policy)
        if outcome.accepted:
            self._files.extend(outcome.accepted)
            self._last_summary = None
        return outcome

    def remove(self, path: str) -> bool:
        before = len(self._files)
        self._files = [f for f in self._files if f.path != path]
        removed = len(self._files) != before
        if removed:
            self._last_summary = None
        return removed

    def clear(self) -> None:
        self._files = []
        self._last_summary = None

    # ---- analysis ----

    def analyze(
        self,
        redact_enabled: bool = True,
        allow_unredacted: bool = False,
        *,
        backend: BackendStatus = BackendStatus.READY,
    ) -> GateOutcome:
        """Run the transmission gate over the current staged set.

        Attempts are serialized; a concurrent call fails instead of waiting.
        """
        if not self._analyze_lock.acquire(blocking=False):
            raise SessionBusyError("An analysis attempt is already in progress")
        try:
            outcome = prepare(
                self.files,
                redact_enabled,
                allow_unredacted,
                backend=backend,
                catalog=self.catalog,
            )
            # Precondition blocks carry no summary; keep the previous one.
            if outcome.summary is not None:
                self._last_summary = outcome.summary
            return outcome
        finally:
            self._analyze_lock.release()
