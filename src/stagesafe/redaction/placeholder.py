"""Placeholder text written in place of a redacted secret."""

from __future__ import annotations

import re

_NON_ALNUM_RUN = re.compile(r"[^A-Z0-9]+")


def label_for(name: str) -> str:
    """Upper-case *name* and collapse every non-alphanumeric run to ``_``.

    Example: ``AWS Access Key ID`` → ``AWS_ACCESS_KEY_ID``
    """
    return _NON_ALNUM_RUN.sub("_", name.upper())


def placeholder_for(name: str) -> str:
    return f"[REDACTED:{label_for(name)}]"


# Any placeholder this module can produce, wherever it sits in the text.
PLACEHOLDER_RE = re.compile(r"\[REDACTED:[A-Z0-9_]*\]")
