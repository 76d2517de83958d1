"""
togglekit – feature flag revisions, approvals, rollbacks and environment toggles.

Import path convention::

    from togglekit.kernel.errors import InvalidStateTransitionError
    from togglekit.domain import Flag, RevisionLifecycleManager
    from togglekit.application.flags import FeatureFlagService
    from togglekit.adapters.mongodb import MongoFlagRepository
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
