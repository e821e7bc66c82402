from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class HostEntry:
    """One static host record from a hosts file."""

    name: str
    """Normalized FQDN (lowercase, trailing dot). Unique key in the database."""

    inet4: str | None = None
    """Canonical IPv4 address, if one is assigned."""

    inet6: str | None = None
    """Canonical IPv6 address, if one is assigned."""

    hostname: str | None = None
    """Optional canonical alias. Informational only."""

    def clone(self) -> HostEntry:
        return HostEntry(
            name=self.name,
            inet4=self.inet4,
            inet6=self.inet6,
            hostname=self.hostname,
        )

    def addresses(self) -> list[str]:
        return [
            address for address in (self.inet4, self.inet6) if address is not None
        ]
