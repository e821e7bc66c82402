"""
IP address helpers: canonical text form, reverse-lookup keys, and
nameserver address strings of the form ``[key@]host[:port][#key]``.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

import dns.exception
import dns.reversename

from .errors import AddressError


DEFAULT_PORT = 53

# Valid port range
MIN_PORT = 0
MAX_PORT = 65535


@dataclass(slots=True, frozen=True)
class ServerAddress:
    """Parsed form of one ``nameserver`` address."""

    family: int
    """Address family, 4 or 6."""

    host: str
    """Canonical textual IP address."""

    port: int = DEFAULT_PORT
    """Port the server listens on."""

    key: str | None = None
    """Optional authentication key bound to this server."""

    @property
    def endpoint(self) -> str:
        """Host, with the port appended when it is not 53."""
        if self.port == DEFAULT_PORT:
            return self.host

        if self.family == 6:
            return f"[{self.host}]:{self.port}"

        return f"{self.host}:{self.port}"

    @property
    def hostname(self) -> str:
        """Display and storage form, accepted back by ``parse_server_address``."""
        if self.key:
            return f"{self.key}@{self.endpoint}"

        return self.endpoint


def parse_ip(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    """
    Parse an IP address, tolerating a single trailing dot.

    IPv4-mapped IPv6 addresses are unwrapped to their IPv4 form.

    Raises:
        AddressError: If text is not an IPv4 or IPv6 address, or carries a
            zone index (``fe80::1%lo0``)
    """
    candidate = text.strip()
    if candidate.endswith(".") and ":" not in candidate:
        candidate = candidate[:-1]

    try:
        address = ipaddress.ip_address(candidate)

    except ValueError:
        raise AddressError(f"Invalid IP address: {text!r}")

    if isinstance(address, ipaddress.IPv6Address):
        if address.scope_id:
            raise AddressError(f"Scoped IPv6 address not supported: {text!r}")

        if address.ipv4_mapped:
            return address.ipv4_mapped

    return address


def normalize_ip(text: str) -> str:
    return str(parse_ip(text))


def ip_family(text: str) -> int:
    return parse_ip(text).version


def reverse_name(address: str) -> str:
    """
    Build the reverse-lookup key for an address.

    Args:
        address: IPv4 or IPv6 address text

    Returns:
        The lowercase ``in-addr.arpa.`` or ``ip6.arpa.`` name, with trailing dot
    """
    canonical = normalize_ip(address)

    try:
        return dns.reversename.from_address(canonical).to_text().lower()

    except dns.exception.DNSException as err:
        raise AddressError(f"Cannot build reverse name for {address!r}: {err}")


def _parse_port(port_text: str) -> int:
    if not port_text.isascii() or not port_text.isdigit():
        raise AddressError(f"Port is not a valid integer: {port_text!r}")

    port = int(port_text)
    if port < MIN_PORT or port > MAX_PORT:
        raise AddressError(f"Port {port} out of valid range ({MIN_PORT}-{MAX_PORT})")

    return port


def parse_server_address(
    text: str,
    default_port: int = DEFAULT_PORT,
) -> ServerAddress:
    """
    Parse a nameserver address string.

    Accepted forms::

        8.8.8.8
        8.8.8.8:5353
        2001:4860:4860::8888
        [2001:4860:4860::8888]:5353
        key@127.0.0.1:5300
        127.0.0.1:5300#key

    Args:
        text: The address string
        default_port: Port used when the string carries none

    Returns:
        The parsed ServerAddress

    Raises:
        AddressError: If the host is not an IP address, the port is out of
            range, or the string is otherwise malformed
    """
    address_str = text.strip()
    if not address_str:
        raise AddressError("Address cannot be empty")

    key: str | None = None

    if "@" in address_str:
        key, address_str = address_str.split("@", 1)

    elif "#" in address_str:
        address_str, key = address_str.rsplit("#", 1)

    if key is not None and (not key or not key.isalnum()):
        raise AddressError(f"Invalid server key: {key!r}")

    port = default_port

    # Handle IPv6 addresses like [::1]:53
    if address_str.startswith("["):
        bracket_end = address_str.find("]")
        if bracket_end == -1:
            raise AddressError("Invalid IPv6 address format: missing closing bracket")

        host = address_str[1:bracket_end]
        remainder = address_str[bracket_end + 1:]

        if remainder:
            if remainder[0] != ":":
                raise AddressError("Invalid IPv6 address format: expected port after bracket")

            port = _parse_port(remainder[1:])

    elif address_str.count(":") == 1:
        host, port_text = address_str.split(":")
        port = _parse_port(port_text)

    else:
        host = address_str

    if not host:
        raise AddressError("Host cannot be empty")

    address = parse_ip(host)

    return ServerAddress(
        family=address.version,
        host=str(address),
        port=port,
        key=key,
    )
