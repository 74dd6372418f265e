"""Pattern catalog — loads built-in and custom patterns, applies config filters."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

import yaml

from stagesafe.config.loader import ConfigError
from stagesafe.config.schema import PatternsConfig
from stagesafe.rules.models import RedactionPattern


_PLACEHOLDER_CONTEXTS = [
    ("", ""),
    ("value ", " value"),
    ('key = "', '"'),
    ("prefix", "suffix"),
    ("line\n", "\nline"),
]


class PatternCatalog:
    """Ordered store of redaction patterns.

    Evaluation order is registration order, except that catch-all
    patterns always run after every specific one.
    """

    def __init__(self) -> None:
        self._patterns: Dict[str, RedactionPattern] = {}
        self._disabled: Set[str] = set()

    # ---- registration ----

    def register(self, pattern: RedactionPattern) -> None:
        self._patterns[pattern.id] = pattern

    def register_many(self, patterns: list[RedactionPattern]) -> None:
        for p in patterns:
            self.register(p)

    # ---- queries ----

    @property
    def all_patterns(self) -> List[RedactionPattern]:
        specific = [p for p in self._patterns.values() if not p.catch_all]
        generic = [p for p in self._patterns.values() if p.catch_all]
        return specific + generic

    def get(self, pattern_id: str) -> Optional[RedactionPattern]:
        return self._patterns.get(pattern_id)

    def enabled_patterns(self) -> List[RedactionPattern]:
        return [
            p for p in self.all_patterns
            if p.enabled and p.id not in self._disabled
        ]

    def __len__(self) -> int:
        return len(self.enabled_patterns())

    # ---- config filtering ----

    def disable(self, pattern_ids: Union[str, Iterable[str]]) -> None:
        if isinstance(pattern_ids, str):
            pattern_ids = [pattern_ids]
        self._disabled.update(pattern_ids)

    def apply_config(self, config: PatternsConfig) -> None:
        self.disable(config.disable)

    # ---- integrity ----

    def verify_placeholder_safe(self) -> None:
        """Fail if any enabled pattern would match into a redaction placeholder.

        Each placeholder is checked bare and embedded in surrounding text;
        a match that overlaps the placeholder span counts.
        """
        from stagesafe.redaction.placeholder import placeholder_for

        active = self.enabled_patterns()
        placeholders = [placeholder_for(p.name) for p in active]
        for p in active:
            for placeholder in placeholders:
                for prefix, suffix in _PLACEHOLDER_CONTEXTS:
                    text = f"{prefix}{placeholder}{suffix}"
                    start, end = len(prefix), len(prefix) + len(placeholder)
                    for match in p.compiled_pattern.finditer(text):
                        if match.start() < end and start < match.end():
                            raise ConfigError(
                                f"Pattern {p.id} matches the placeholder {placeholder}; "
                                "redacted output would be redacted again"
                            )

    # ---- custom pattern loading ----

    def load_custom_patterns(self, directory: Path) -> int:
        """Load YAML pattern files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_patterns(path)
        return count

    def _load_yaml_patterns(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to read pattern file {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            if not isinstance(entry, dict) or "id" not in entry or "pattern" not in entry:
                raise ConfigError(f"{path}: every pattern needs an 'id' and a 'pattern'")
            pattern = RedactionPattern(
                id=entry["id"],
                name=entry.get("name", entry["id"]),
                pattern=entry["pattern"],
                description=entry.get("description", ""),
                ignore_case=bool(entry.get("ignore_case", False)),
                catch_all=bool(entry.get("catch_all", False)),
            )
            try:
                _ = pattern.compiled_pattern
            except re.error as exc:
                raise ConfigError(f"{path}: invalid pattern {pattern.id}: {exc}") from exc
            self.register(pattern)
            count += 1
        return count


def build_catalog(config: Optional[PatternsConfig] = None) -> PatternCatalog:
    """Create a fully populated, config-filtered pattern catalog."""
    from stagesafe.rules.builtin import ALL_BUILTIN_PATTERNS

    config = config or PatternsConfig()
    catalog = PatternCatalog()
    catalog.register_many(ALL_BUILTIN_PATTERNS)

    if config.custom_dir:
        catalog.load_custom_patterns(Path(config.custom_dir))

    catalog.apply_config(config)

    # Force-compile patterns now (not inside the hot loop)
    for pattern in catalog.enabled_patterns():
        _ = pattern.compiled_pattern

    catalog.verify_placeholder_safe()
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> PatternCatalog:
    """The built-in catalog with nothing disabled."""
    return build_catalog()
