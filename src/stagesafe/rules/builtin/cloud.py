"""Cloud provider credentials — AWS key IDs and secrets, Google API keys."""

from stagesafe.rules.models import RedactionPattern

AWS_ACCESS_KEY_ID = RedactionPattern(
    id="AWS_ACCESS_KEY_ID",
    name="AWS Access Key ID",
    description="Long-term AWS access key IDs (AKIA prefix).",
    pattern=r"AKIA[0-9A-Z]{16}",
)

AWS_SESSION_KEY_ID = RedactionPattern(
    id="AWS_SESSION_KEY_ID",
    name="AWS Session Key ID",
    description="Temporary STS access key IDs (ASIA prefix).",
    pattern=r"ASIA[0-9A-Z]{16}",
)

AWS_SECRET_ACCESS_KEY = RedactionPattern(
    id="AWS_SECRET_ACCESS_KEY",
    name="AWS Secret Access Key",
    description="Quoted 40-character AWS secret assigned to an aws...key name.",
    pattern=(
        r"aws([^\[\]\n]{0,20})?(secret|access)?([^\[\]\n]{0,20})?key"
        r"\s*[:=]\s*['\"][A-Za-z0-9/+=]{40}['\"]"
    ),
    ignore_case=True,
)

GOOGLE_API_KEY = RedactionPattern(
    id="GOOGLE_API_KEY",
    name="Google API Key",
    description="Google Cloud / Firebase API keys (AIza prefix).",
    pattern=r"AIza[0-9A-Za-z\-_]{35}",
)

ALL_CLOUD_PATTERNS = [
    AWS_ACCESS_KEY_ID,
    AWS_SESSION_KEY_ID,
    AWS_SECRET_ACCESS_KEY,
    GOOGLE_API_KEY,
]
