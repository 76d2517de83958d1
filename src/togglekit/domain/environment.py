"""Environment — a named deployment target with its own on/off switch."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class Environment:
    name: str
    is_enabled: bool = False

    def toggle(self) -> None:
        self.is_enabled = not self.is_enabled


__all__ = ["Environment"]
