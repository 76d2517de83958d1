"""MongoDB adapter — flag repository and audit timeline.

Requires the ``mongodb`` extra::

    pip install "togglekit[mongodb]"
"""

from togglekit.adapters.mongodb.audit import MongoAuditRecorder
from togglekit.adapters.mongodb.repository import MongoFlagRepository

__all__ = ["MongoAuditRecorder", "MongoFlagRepository"]
