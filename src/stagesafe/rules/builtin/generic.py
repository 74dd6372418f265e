"""Generic secret-assignment heuristic — must stay last in the catalog."""

from stagesafe.rules.models import RedactionPattern

# The value class excludes '[' and ':' so placeholders never re-match.
GENERIC_SECRET_ASSIGNMENT = RedactionPattern(
    id="GENERIC_SECRET_ASSIGNMENT",
    name="Generic Secret Assignment",
    description="api/secret/token/password names assigned a quoted 16+ char value.",
    pattern=(
        r"(api|secret|token|password)[-_ ]?(key|token|secret|pwd)?"
        r"\s*[:=]\s*['\"][A-Za-z0-9_\-]{16,}['\"]"
    ),
    ignore_case=True,
    catch_all=True,
)

ALL_GENERIC_PATTERNS = [GENERIC_SECRET_ASSIGNMENT]
