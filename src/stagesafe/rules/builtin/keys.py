"""Private key detection."""

from stagesafe.rules.models import RedactionPattern

PRIVATE_KEY_BLOCK = RedactionPattern(
    id="PRIVATE_KEY_BLOCK",
    name="Private Key Block",
    description="PEM private key, header through footer (RSA, EC, DSA, OpenSSH, PKCS#8).",
    pattern=(
        r"-----BEGIN [A-Z ]*PRIVATE KEY-----"
        r"[\s\S]*?"
        r"-----END [A-Z ]*PRIVATE KEY-----"
    ),
)

ALL_KEY_PATTERNS = [PRIVATE_KEY_BLOCK]
