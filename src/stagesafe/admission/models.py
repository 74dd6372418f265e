"""Data models for batch admission."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union


class SkipReason(str, Enum):
    IGNORED = "ignored"
    SENSITIVE = "sensitive"
    LARGE = "large"
    DUPLICATE = "duplicate"
    BINARY = "binary"


@dataclass(frozen=True)
class RawFile:
    """A candidate file as supplied by whatever picked it.

    Content comes either inline (``data``) or from ``source`` on disk;
    ``source`` is only read once the candidate clears every cheap check.
    """

    name: str
    path: str  # batch-relative, unique key once staged
    size: int
    data: Optional[Union[bytes, str]] = None
    source: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.data is None and self.source is None:
            raise ValueError(f"RawFile {self.path!r} needs either data or source")

    @classmethod
    def from_content(cls, path: str, data: Union[bytes, str]) -> "RawFile":
        raw = data.encode("utf-8") if isinstance(data, str) else data
        return cls(name=path.rsplit("/", 1)[-1], path=path, size=len(raw), data=data)

    def read(self) -> Union[bytes, str]:
        """Return the content; at most ``size + 1`` bytes come off disk.

        A result longer than ``size`` means the file grew after it was
        described, and the caller must not trust the declared size.
        """
        if self.data is not None:
            return self.data
        if self.source is None:
            raise ValueError(f"RawFile {self.path!r} has no content to read")
        with open(self.source, "rb") as f:
            return f.read(self.size + 1)


@dataclass(frozen=True)
class StagedFile:
    """A file accepted into the working set. Never mutated in place."""

    name: str
    path: str
    content: str
    size: int  # byte length as originally read


@dataclass
class AdmissionOutcome:
    """Result of admitting one candidate batch."""

    accepted: List[StagedFile] = field(default_factory=list)
    skipped_ignored: int = 0
    skipped_sensitive: int = 0
    skipped_large: int = 0
    skipped_duplicate: int = 0
    skipped_binary: int = 0
    limit_reached: bool = False

    def record(self, reason: SkipReason) -> None:
        attr = f"skipped_{reason.value}"
        setattr(self, attr, getattr(self, attr) + 1)

    @property
    def accepted_size(self) -> int:
        return sum(f.size for f in self.accepted)

    @property
    def total_skipped(self) -> int:
        return (
            self.skipped_ignored
            + self.skipped_sensitive
            + self.skipped_large
            + self.skipped_duplicate
            + self.skipped_binary
        )
