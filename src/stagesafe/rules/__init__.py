"""Pattern catalog — models, registry, built-in patterns."""

from stagesafe.rules.models import RedactionPattern
from stagesafe.rules.registry import PatternCatalog, build_catalog, default_catalog

__all__ = ["PatternCatalog", "RedactionPattern", "build_catalog", "default_catalog"]
