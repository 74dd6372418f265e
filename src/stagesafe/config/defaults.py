"""Starter .stagesafe.toml template."""

DEFAULT_TOML = """\
# StageSafe Configuration
version = "1.0"

[admission]
max_file_count = 300
max_file_size_bytes = 1048576      # 1 MiB per file (inclusive)
max_total_size_bytes = 6291456     # 6 MiB across the staged set
allow_sensitive = false            # .env, *.pem, id_rsa, secrets.* ...
# ignored_segments = ["node_modules", "dist", "build", "coverage", ".git", ".next", "out"]
# sensitive_patterns = ['\\.env(\\.|$)', 'id_rsa', '\\.pem$']

[redaction]
enabled = true                     # send [REDACTED:...] placeholders instead of secrets
allow_unredacted = false           # only consulted when enabled = false

[patterns]
# disable = ["JWT"]
# custom_dir = ".stagesafe-patterns"   # YAML files, evaluated before the generic catch-all

[output]
format = "terminal"                # terminal | json | bundle
show_summary = true
"""
