"""Outbound payload — the single handoff to the analysis backend."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from stagesafe.admission.models import StagedFile
from stagesafe.config.schema import AdmissionPolicy
from stagesafe.gate.models import Send


class PayloadError(Exception):
    """Raised when an outbound file set violates the boundary limits."""


def to_payload(send: Send) -> List[Dict[str, str]]:
    return [{"path": f.path, "content": f.content} for f in send.files]


def render_bundle(files: Sequence[StagedFile]) -> str:
    """Concatenate files into the text bundle the analysis prompt embeds."""
    return "\n\n".join(f"--- FILE: {f.path} ---\n{f.content}" for f in files)


def validate_payload(files: Any, policy: AdmissionPolicy) -> None:
    """Re-check an outbound ``{path, content}`` list at the boundary.

    Admission already enforces these limits; a failure here means the
    list was built without going through the gate.
    """
    if not isinstance(files, list):
        raise PayloadError("Invalid payload: files must be a list.")
    if len(files) > policy.max_file_count:
        raise PayloadError("Too many files in a single request.")

    total = 0
    for entry in files:
        if not isinstance(entry, dict):
            raise PayloadError("Invalid payload: each file must be an object.")
        path, content = entry.get("path"), entry.get("content")
        if not isinstance(path, str) or not isinstance(content, str):
            raise PayloadError("Invalid payload: file path and content must be strings.")
        size = len(content.encode("utf-8"))
        if size > policy.max_file_size_bytes:
            raise PayloadError(f"File {path} exceeds size limit.")
        total += size
        if total > policy.max_total_size_bytes:
            raise PayloadError("Total payload exceeds size limit.")
