"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Literal, Optional

MIB = 1024 * 1024

DEFAULT_IGNORED_SEGMENTS: List[str] = [
    "node_modules",
    "dist",
    "build",
    "coverage",
    ".git",
    ".next",
    "out",
]

# Matched against the file name only, case-insensitive.
DEFAULT_SENSITIVE_PATTERNS: List[str] = [
    r"\.env(\.|$)",
    r"id_rsa",
    r"\.pem$",
    r"\.key$",
    r"\.pfx$",
    r"\.p12$",
    r"\.kdbx$",
    r"secrets?\.",
]


class PolicyError(ValueError):
    """Raised when an admission policy is internally inconsistent."""


@dataclass
class AdmissionPolicy:
    """Limits and filters applied to every candidate batch.

    Validated on construction: a bad policy is a programming or
    configuration error and must never reach ``admit``.
    """

    max_file_count: int = 300
    max_file_size_bytes: int = 1 * MIB
    max_total_size_bytes: int = 6 * MIB
    ignored_segments: List[str] = field(
        default_factory=lambda: list(DEFAULT_IGNORED_SEGMENTS)
    )
    sensitive_patterns: List[str] = field(
        default_factory=lambda: list(DEFAULT_SENSITIVE_PATTERNS)
    )
    allow_sensitive: bool = False

    _compiled_sensitive: List[re.Pattern[str]] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("max_file_count", "max_file_size_bytes", "max_total_size_bytes"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise PolicyError(f"{name} must be a positive integer, got {value!r}")
        if self.max_file_size_bytes > self.max_total_size_bytes:
            raise PolicyError(
                "max_file_size_bytes cannot exceed max_total_size_bytes "
                f"({self.max_file_size_bytes} > {self.max_total_size_bytes})"
            )
        compiled: List[re.Pattern[str]] = []
        for pat in self.sensitive_patterns:
            try:
                compiled.append(re.compile(pat, re.IGNORECASE))
            except re.error as exc:
                raise PolicyError(f"Invalid sensitive pattern {pat!r}: {exc}") from exc
        self._compiled_sensitive = compiled

    @property
    def compiled_sensitive(self) -> List[re.Pattern[str]]:
        return self._compiled_sensitive


@dataclass
class RedactionConfig:
    enabled: bool = True  # send redacted content
    allow_unredacted: bool = False  # user override when redaction is off


@dataclass
class PatternsConfig:
    disable: List[str] = field(default_factory=list)
    custom_dir: Optional[str] = None  # directory of YAML pattern files

    def __post_init__(self) -> None:
        # A bare string in TOML means a single id.
        if isinstance(self.disable, str):
            self.disable = [self.disable]


@dataclass
class OutputConfig:
    format: Literal["terminal", "json", "bundle"] = "terminal"
    show_summary: bool = True


@dataclass
class StageSafeConfig:
    version: str = "1.0"
    admission: AdmissionPolicy = field(default_factory=AdmissionPolicy)
    redaction: RedactionConfig = field(default_factory=RedactionConfig)
    patterns: PatternsConfig = field(default_factory=PatternsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
