"""Application pagination – PageRequest."""
from __future__ import annotations

import dataclasses

from togglekit.kernel.errors import ValidationError

MAX_PAGE_SIZE = 100


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters (1-based ``page``)."""
    page: int = 1
    size: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page must be >= 1", errors=[{"field": "page", "message": ">= 1"}])
        if self.size < 1 or self.size > MAX_PAGE_SIZE:
            raise ValidationError(
                f"size must be between 1 and {MAX_PAGE_SIZE}",
                errors=[{"field": "size", "message": f"1..{MAX_PAGE_SIZE}"}],
            )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


__all__ = ["MAX_PAGE_SIZE", "PageRequest"]
