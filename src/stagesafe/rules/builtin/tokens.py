"""Token detection — GitHub, Slack, Stripe, JWT."""

from stagesafe.rules.models import RedactionPattern

GITHUB_TOKEN = RedactionPattern(
    id="GITHUB_TOKEN",
    name="GitHub Token",
    description="Classic (ghp_) and fine-grained (github_pat_) personal access tokens.",
    pattern=r"ghp_[A-Za-z0-9]{36,}|github_pat_[A-Za-z0-9_]{22,}",
)

SLACK_TOKEN = RedactionPattern(
    id="SLACK_TOKEN",
    name="Slack Token",
    description="Slack bot/user/app/refresh tokens.",
    pattern=r"xox[baprs]-[A-Za-z0-9-]{10,}",
)

STRIPE_SECRET_KEY = RedactionPattern(
    id="STRIPE_SECRET_KEY",
    name="Stripe Secret Key",
    description="Stripe live-mode secret API keys.",
    pattern=r"sk_live_[0-9a-zA-Z]{16,}",
)

JWT = RedactionPattern(
    id="JWT",
    name="JWT",
    description="Three-segment base64url bearer tokens (eyJ... header).",
    pattern=r"eyJ[0-9A-Za-z_-]{10,}\.[0-9A-Za-z_-]{10,}\.[0-9A-Za-z_-]{10,}",
)

ALL_TOKEN_PATTERNS = [GITHUB_TOKEN, SLACK_TOKEN, STRIPE_SECRET_KEY, JWT]
