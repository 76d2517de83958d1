"""Wire settings, logging and MongoDB adapters into a FeatureFlagService."""

from __future__ import annotations

from typing import Any

from togglekit.adapters.mongodb import MongoAuditRecorder, MongoFlagRepository
from togglekit.application.flags import FeatureFlagService
from togglekit.config import TogglekitSettings, load_settings
from togglekit.observability.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _require_motor() -> Any:
    try:
        import motor.motor_asyncio as motor_asyncio  # type: ignore[import-untyped]
    except ImportError as exc:
        raise ImportError("Install 'togglekit[mongodb]' to use the MongoDB adapters") from exc
    return motor_asyncio


def build_service(
    settings: TogglekitSettings | None = None,
    client: Any = None,
) -> FeatureFlagService:
    """Return a service backed by MongoDB.

    *client* is an ``AsyncIOMotorClient``; when omitted one is created from
    ``settings.mongo_uri`` with timezone-aware datetimes.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level, json_output=settings.json_logs)
    if client is None:
        client = _require_motor().AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)
    db = client[settings.database]
    service = FeatureFlagService(
        MongoFlagRepository(db[settings.flags_collection]),
        MongoAuditRecorder(db[settings.timeline_collection]),
        settings=settings,
    )
    logger.info(
        "togglekit.started",
        database=settings.database,
        strict_toggle=settings.strict_toggle,
    )
    return service


async def ensure_indexes(settings: TogglekitSettings, client: Any) -> None:
    """Create the collection indexes the adapters rely on."""
    await MongoFlagRepository.create_indexes(client[settings.database][settings.flags_collection])


__all__ = ["build_service", "ensure_indexes"]
