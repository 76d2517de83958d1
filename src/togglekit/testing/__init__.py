"""Testing support – fakes, builders and hypothesis strategies."""

from togglekit.testing.builders import make_flag, make_revision
from togglekit.testing.fakes import (
    FailingAuditRecorder,
    FakeClock,
    InMemoryAuditRecorder,
    InMemoryFlagRepository,
)
from togglekit.testing.generators import environment_names, lifecycle_operations, rule_strategy

__all__ = [
    "FailingAuditRecorder",
    "FakeClock",
    "InMemoryAuditRecorder",
    "InMemoryFlagRepository",
    "environment_names",
    "lifecycle_operations",
    "make_flag",
    "make_revision",
    "rule_strategy",
]
