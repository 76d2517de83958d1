"""Config settings – Settings base class and TogglekitSettings."""
from __future__ import annotations

import dataclasses
import logging

from togglekit.application.pagination import MAX_PAGE_SIZE
from togglekit.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class TogglekitSettings(Settings):
    """Service settings, read from ``TOGGLEKIT_*`` environment variables.

    ``strict_toggle`` makes toggling an unknown environment an error
    instead of a silent no-op.
    """

    _prefix: dataclasses.ClassVar[str] = "TOGGLEKIT"

    mongo_uri: str = "mongodb://localhost:27017"
    database: str = "togglekit"
    flags_collection: str = "feature_flags"
    timeline_collection: str = "timelines"
    log_level: str = "INFO"
    json_logs: bool = True
    strict_toggle: bool = False
    default_page_size: int = 20

    def _validate(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")
        if not 1 <= self.default_page_size <= MAX_PAGE_SIZE:
            raise InvalidSettingValueError(
                "default_page_size",
                self.default_page_size,
                f"must be between 1 and {MAX_PAGE_SIZE}",
            )
        for name in ("database", "flags_collection", "timeline_collection"):
            if not getattr(self, name):
                raise InvalidSettingValueError(name, getattr(self, name), "must not be empty")


__all__ = ["Settings", "TogglekitSettings"]
