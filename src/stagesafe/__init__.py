"""StageSafe — admit, redact, and gate source files before they leave the machine."""

__version__ = "0.1.0"
