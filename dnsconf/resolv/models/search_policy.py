"""
Search-domain policy for unqualified names.

A resolver either appends a single default domain or walks an ordered
search list, never both. The policy is one of three variants, so the two
cannot be populated at the same time.
"""

from __future__ import annotations

from dataclasses import dataclass


MAX_SEARCH_DOMAINS = 6
MAX_SEARCH_LENGTH = 256


@dataclass(slots=True, frozen=True)
class NoSearch:
    """No default domain and no search list."""


@dataclass(slots=True, frozen=True)
class DomainSuffix:
    """A single default domain (``domain`` directive)."""

    domain: str
    """FQDN appended to unqualified names."""


@dataclass(slots=True, frozen=True)
class SearchList:
    """An ordered list of suffixes (``search`` directive)."""

    names: tuple[str, ...]
    """FQDNs tried in order, at most six."""


SearchPolicy = NoSearch | DomainSuffix | SearchList
