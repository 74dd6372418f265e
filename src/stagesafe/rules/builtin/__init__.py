"""Built-in patterns — aggregate all categories in evaluation order."""

from stagesafe.rules.builtin.cloud import ALL_CLOUD_PATTERNS
from stagesafe.rules.builtin.generic import ALL_GENERIC_PATTERNS
from stagesafe.rules.builtin.keys import ALL_KEY_PATTERNS
from stagesafe.rules.builtin.tokens import ALL_TOKEN_PATTERNS
from stagesafe.rules.models import RedactionPattern

ALL_BUILTIN_PATTERNS: list[RedactionPattern] = [
    *ALL_KEY_PATTERNS,
    *ALL_CLOUD_PATTERNS,
    *ALL_TOKEN_PATTERNS,
    *ALL_GENERIC_PATTERNS,
]

__all__ = ["ALL_BUILTIN_PATTERNS"]
