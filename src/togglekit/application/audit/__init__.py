"""Application audit – flag mutation trail."""
from togglekit.application.audit.event import AuditEvent, AuditEventKind
from togglekit.application.audit.in_memory import InMemoryAuditRecorder
from togglekit.application.audit.recorder import AuditRecorder

__all__ = ["AuditEvent", "AuditEventKind", "AuditRecorder", "InMemoryAuditRecorder"]
