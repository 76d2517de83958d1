"""Environment toggles — flip one environment's enabled switch."""

from __future__ import annotations

from togglekit.domain.flag import Flag
from togglekit.observability.logging import get_logger

logger = get_logger(__name__)


class EnvironmentToggleManager:
    """Owns the per-environment ``is_enabled`` map of a flag.

    Toggling never touches revisions or the version counter.
    """

    def toggle(self, flag: Flag, environment_name: str) -> Flag:
        """Flip *environment_name*; an unknown name leaves every environment as is."""
        environment = flag.environments.get(environment_name)
        if environment is None:
            logger.debug(
                "environment.toggle_ignored",
                flag_id=str(flag.id),
                environment=environment_name,
            )
            return flag
        environment.toggle()
        logger.info(
            "environment.toggled",
            flag_id=str(flag.id),
            environment=environment_name,
            is_enabled=environment.is_enabled,
        )
        return flag


__all__ = ["EnvironmentToggleManager"]
