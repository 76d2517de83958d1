"""Testing generators – property-based strategies."""
from togglekit.testing.generators.strategies import (
    environment_names,
    lifecycle_operations,
    rule_strategy,
)

__all__ = ["environment_names", "lifecycle_operations", "rule_strategy"]
