"""Load and merge configuration from .stagesafe.toml, env vars, and CLI flags."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from stagesafe.config.schema import (
    AdmissionPolicy,
    OutputConfig,
    PatternsConfig,
    PolicyError,
    RedactionConfig,
    StageSafeConfig,
)

CONFIG_FILENAME = ".stagesafe.toml"
OUTPUT_FORMATS = ("terminal", "json", "bundle")

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when config is malformed, unreadable, or inconsistent."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls) if f.init}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def _env_int(name: str) -> Optional[int]:
    val = os.environ.get(name)
    if val is None or not val.strip():
        return None
    try:
        return int(val)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {val!r}") from exc


def _env_flag(name: str) -> Optional[bool]:
    val = os.environ.get(name, "").strip().lower()
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    return None


def _merge_env_overrides(cfg: StageSafeConfig) -> None:
    """Apply STAGESAFE_* environment variable overrides."""
    policy = cfg.admission
    if (val := _env_int("STAGESAFE_MAX_FILE_COUNT")) is not None:
        policy.max_file_count = val
    if (val := _env_int("STAGESAFE_MAX_FILE_SIZE_BYTES")) is not None:
        policy.max_file_size_bytes = val
    if (val := _env_int("STAGESAFE_MAX_TOTAL_SIZE_BYTES")) is not None:
        policy.max_total_size_bytes = val
    if (flag := _env_flag("STAGESAFE_ALLOW_SENSITIVE")) is not None:
        policy.allow_sensitive = flag
    if val := os.environ.get("STAGESAFE_IGNORED_SEGMENTS"):
        policy.ignored_segments.extend(
            s.strip() for s in val.split(os.pathsep) if s.strip()
        )

    if (flag := _env_flag("STAGESAFE_REDACT")) is not None:
        cfg.redaction.enabled = flag
    if (flag := _env_flag("STAGESAFE_ALLOW_UNREDACTED")) is not None:
        cfg.redaction.allow_unredacted = flag

    if val := os.environ.get("STAGESAFE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("STAGESAFE_DISABLE_PATTERNS"):
        cfg.patterns.disable.extend(p.strip() for p in val.split(",") if p.strip())


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> StageSafeConfig:
    """Load, validate, and return a StageSafeConfig."""
    config_path = find_config_file(root, config_override)

    try:
        if config_path is None:
            cfg = StageSafeConfig()
        else:
            raw = _parse_toml(config_path)
            cfg = StageSafeConfig(
                version=raw.get("version", "1.0"),
                admission=_build_section(raw, AdmissionPolicy, "admission"),
                redaction=_build_section(raw, RedactionConfig, "redaction"),
                patterns=_build_section(raw, PatternsConfig, "patterns"),
                output=_build_section(raw, OutputConfig, "output"),
            )

        _merge_env_overrides(cfg)
        # Env overrides mutate the policy after construction; re-check it.
        cfg.admission.validate()
    except PolicyError as exc:
        raise ConfigError(str(exc)) from exc

    if cfg.patterns.custom_dir and config_path is not None:
        custom = Path(cfg.patterns.custom_dir)
        if not custom.is_absolute():
            cfg.patterns.custom_dir = str(config_path.parent / custom)

    return cfg
