"""Application flags – repository port, in-memory adapter and use cases."""
from togglekit.application.flags.in_memory import InMemoryFlagRepository
from togglekit.application.flags.repository import FlagRepository
from togglekit.application.flags.service import FeatureFlagService

__all__ = ["FeatureFlagService", "FlagRepository", "InMemoryFlagRepository"]
