"""Static resource-prefix table used to invalidate cached reads after writes.

A successful write to a path is matched against the table in order; the
first rule whose marker appears in the path names the cache partitions to
purge. Paths matching no rule purge nothing.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InvalidationRule:
    """Path marker and the partition names a write under it invalidates."""

    path_marker: str
    partitions: tuple[str, ...]


# Organisations and team membership are coupled: a write to either view
# changes the other.
INVALIDATION_RULES: tuple[InvalidationRule, ...] = (
    InvalidationRule("/campaigns", ("campaigns",)),
    InvalidationRule("/items", ("items",)),
    InvalidationRule("/analytics", ("analytics",)),
    InvalidationRule("/organizations", ("organizations", "team")),
)


def partitions_for_path(
    path: str,
    rules: tuple[InvalidationRule, ...] = INVALIDATION_RULES,
) -> tuple[str, ...]:
    """Return partitions to invalidate after a successful write to `path`."""
    for rule in rules:
        if rule.path_marker in path:
            return rule.partitions
    return ()
