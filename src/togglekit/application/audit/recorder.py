"""Application audit – AuditRecorder port."""

from __future__ import annotations

import abc

from togglekit.application.audit.event import AuditEvent
from togglekit.kernel.types import FlagId


class AuditRecorder(abc.ABC):
    """Port — append-only audit trail per flag.

    Implementations must keep events of one flag in call order.  Failures
    are raised as :class:`~togglekit.kernel.errors.StorageError`.
    """

    @abc.abstractmethod
    async def append(self, event: AuditEvent) -> None:
        """Persist *event* at the end of its flag's trail."""

    @abc.abstractmethod
    async def list_for_flag(self, flag_id: FlagId) -> list[AuditEvent]:
        """Return the trail of *flag_id*, oldest first."""


__all__ = ["AuditRecorder"]
