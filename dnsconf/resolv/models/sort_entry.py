from dataclasses import dataclass


MAX_SORTLIST = 10


@dataclass(slots=True, frozen=True)
class SortEntry:
    """One ``sortlist`` preference pair."""

    ip: str
    """Canonical network address."""

    mask: str | None = None
    """Canonical netmask, if one was given."""
