"""Tests for pattern models, catalog ordering, and custom pattern loading."""

import pytest
import yaml

from conftest import AWS_KEY_ID, AWS_SECRET, GOOGLE_KEY, SLACK_TOKEN

from stagesafe.config.loader import ConfigError
from stagesafe.config.schema import PatternsConfig
from stagesafe.rules.builtin import ALL_BUILTIN_PATTERNS
from stagesafe.rules.models import RedactionPattern
from stagesafe.rules.registry import PatternCatalog, build_catalog, default_catalog


class TestPatternModel:
    def test_compiled_pattern_cached(self):
        p = RedactionPattern(id="T", name="Test", pattern=r"secret_[a-z]+")
        assert p.compiled_pattern is p.compiled_pattern
        assert p.compiled_pattern.search("my_secret_key")

    def test_ignore_case_flag(self):
        p = RedactionPattern(id="T", name="Test", pattern=r"token", ignore_case=True)
        assert p.compiled_pattern.search("TOKEN")


class TestBuiltinCatalog:
    @pytest.mark.parametrize("pattern", ALL_BUILTIN_PATTERNS, ids=lambda p: p.id)
    def test_pattern_compiles(self, pattern):
        assert pattern.compiled_pattern is not None
        assert pattern.name

    def test_names_unique(self):
        names = [p.name for p in ALL_BUILTIN_PATTERNS]
        assert len(names) == len(set(names))

    def test_generic_assignment_is_last(self):
        assert default_catalog().enabled_patterns()[-1].id == "GENERIC_SECRET_ASSIGNMENT"

    def test_private_key_is_first(self):
        assert default_catalog().enabled_patterns()[0].id == "PRIVATE_KEY_BLOCK"

    def test_two_aws_key_id_shapes(self):
        ids = {p.id for p in ALL_BUILTIN_PATTERNS}
        assert {"AWS_ACCESS_KEY_ID", "AWS_SESSION_KEY_ID"} <= ids

    def test_shapes_match(self):
        from stagesafe.rules.builtin.cloud import (
            AWS_ACCESS_KEY_ID,
            AWS_SECRET_ACCESS_KEY,
            GOOGLE_API_KEY,
        )
        from stagesafe.rules.builtin.tokens import SLACK_TOKEN as SLACK

        assert AWS_ACCESS_KEY_ID.compiled_pattern.search(f"id={AWS_KEY_ID}")
        assert not AWS_ACCESS_KEY_ID.compiled_pattern.search("AKIAshort")
        assert AWS_SECRET_ACCESS_KEY.compiled_pattern.search(f"AWS_SECRET_KEY: '{AWS_SECRET}'")
        assert GOOGLE_API_KEY.compiled_pattern.search(GOOGLE_KEY)
        assert SLACK.compiled_pattern.search(SLACK_TOKEN)

    def test_generic_requires_quotes_and_length(self):
        from stagesafe.rules.builtin.generic import GENERIC_SECRET_ASSIGNMENT as G

        p = G.compiled_pattern
        assert p.search('PASSWORD = "abcdefghij1234567"')
        assert p.search("secret-token: 'abcdefghij123456'")
        assert not p.search("password = abcdefghij1234567")
        assert not p.search('password = "short"')


class TestCatalog:
    def test_catch_all_sorted_last(self):
        cat = PatternCatalog()
        cat.register(RedactionPattern(id="G", name="G", pattern="g", catch_all=True))
        cat.register(RedactionPattern(id="S", name="S", pattern="s"))
        assert [p.id for p in cat.enabled_patterns()] == ["S", "G"]

    def test_disable(self):
        cat = build_catalog(PatternsConfig(disable=["JWT"]))
        assert cat.get("JWT") is not None
        assert "JWT" not in {p.id for p in cat.enabled_patterns()}

    def test_disable_does_not_leak_into_default(self):
        build_catalog(PatternsConfig(disable=["JWT"]))
        assert "JWT" in {p.id for p in build_catalog().enabled_patterns()}

    def test_disable_single_string(self):
        cat = build_catalog()
        cat.disable("JWT")
        ids = {p.id for p in cat.enabled_patterns()}
        assert "JWT" not in ids
        assert len(cat) == len(ALL_BUILTIN_PATTERNS) - 1

    def test_disable_string_from_config(self):
        cat = build_catalog(PatternsConfig(disable="JWT"))
        assert len(cat) == len(ALL_BUILTIN_PATTERNS) - 1


class TestCustomPatterns:
    def _write(self, directory, entries, name="custom.yaml"):
        directory.mkdir(exist_ok=True)
        (directory / name).write_text(yaml.dump(entries))

    def test_custom_loaded_before_generic(self, tmp_path):
        rules_dir = tmp_path / ".stagesafe-patterns"
        self._write(rules_dir, [{
            "id": "INTERNAL_TOKEN",
            "name": "Internal Token",
            "pattern": r"itk_[a-z0-9]{12}",
        }])
        cat = build_catalog(PatternsConfig(custom_dir=str(rules_dir)))
        ids = [p.id for p in cat.enabled_patterns()]
        assert ids[-1] == "GENERIC_SECRET_ASSIGNMENT"
        assert ids[-2] == "INTERNAL_TOKEN"

    def test_missing_directory_loads_nothing(self, tmp_path):
        assert PatternCatalog().load_custom_patterns(tmp_path / "nope") == 0

    def test_placeholder_matching_pattern_rejected(self, tmp_path):
        rules_dir = tmp_path / "patterns"
        self._write(rules_dir, {"id": "GREEDY", "pattern": r"REDACTED"})
        with pytest.raises(ConfigError, match="placeholder"):
            build_catalog(PatternsConfig(custom_dir=str(rules_dir)))

    def test_pattern_spanning_embedded_placeholder_rejected(self, tmp_path):
        rules_dir = tmp_path / "patterns"
        self._write(rules_dir, {"id": "SPAN", "pattern": r"value.{0,60}value"})
        with pytest.raises(ConfigError, match="SPAN"):
            build_catalog(PatternsConfig(custom_dir=str(rules_dir)))

    def test_builtins_are_placeholder_safe(self):
        build_catalog().verify_placeholder_safe()

    def test_missing_pattern_key_rejected(self, tmp_path):
        rules_dir = tmp_path / "patterns"
        self._write(rules_dir, [{"id": "NO_PATTERN"}])
        with pytest.raises(ConfigError):
            build_catalog(PatternsConfig(custom_dir=str(rules_dir)))

    def test_invalid_regex_rejected(self, tmp_path):
        rules_dir = tmp_path / "patterns"
        self._write(rules_dir, [{"id": "BAD", "pattern": "(unclosed"}])
        with pytest.raises(ConfigError, match="BAD"):
            build_catalog(PatternsConfig(custom_dir=str(rules_dir)))
