"""Round orchestration for the two games built on the tracing engine."""

from src.session.coverage import CoverageSession
from src.session.hazard import HazardSession, Phase

__all__ = ["CoverageSession", "HazardSession", "Phase"]
