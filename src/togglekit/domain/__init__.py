"""Domain – flag aggregate and its revision/environment state machine."""
from togglekit.domain.environment import Environment
from togglekit.domain.flag import INITIAL_VERSION, Flag, FlagType
from togglekit.domain.lifecycle import RevisionLifecycleManager
from togglekit.domain.revision import ALLOWED_TRANSITIONS, Revision, RevisionStatus, Rule
from togglekit.domain.toggle import EnvironmentToggleManager

__all__ = [
    "ALLOWED_TRANSITIONS",
    "INITIAL_VERSION",
    "Environment",
    "EnvironmentToggleManager",
    "Flag",
    "FlagType",
    "Revision",
    "RevisionLifecycleManager",
    "RevisionStatus",
    "Rule",
]
