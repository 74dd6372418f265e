"""Redaction pattern model — pattern stored as string, compiled at load time."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RedactionPattern:
    """A single named detection rule.

    ``pattern`` is stored as a raw string so the rule remains serialisable.
    The compiled regex is built lazily on first access via ``compiled_pattern``.
    ``name`` doubles as the placeholder label written into redacted text.
    """

    id: str
    name: str
    pattern: str
    description: str = ""
    ignore_case: bool = False
    catch_all: bool = False  # generic heuristics are evaluated after specific shapes
    enabled: bool = True

    # --- cached compiled object (not serialised) ---
    _compiled_pattern: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def flags(self) -> int:
        return re.IGNORECASE if self.ignore_case else 0

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        if self._compiled_pattern is None:
            self._compiled_pattern = re.compile(self.pattern, self.flags)
        return self._compiled_pattern
