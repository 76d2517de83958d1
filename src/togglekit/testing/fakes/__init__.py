"""Testing fakes – in-memory doubles for kernel and application ports."""
from togglekit.application.audit import InMemoryAuditRecorder
from togglekit.application.flags import InMemoryFlagRepository
from togglekit.kernel.time import FrozenClock
from togglekit.testing.fakes.audit import FailingAuditRecorder
from togglekit.testing.fakes.clock import FakeClock

__all__ = [
    "FailingAuditRecorder",
    "FakeClock",
    "FrozenClock",
    "InMemoryAuditRecorder",
    "InMemoryFlagRepository",
]
