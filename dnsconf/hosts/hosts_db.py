"""
Static hosts database, loaded from an ``/etc/hosts``-style file.

Names map forward to a HostEntry holding at most one IPv4 and one IPv6
address. Every assigned address also gets a reverse-lookup key
(``4.3.2.1.in-addr.arpa.``) that points back at the forward name, so a
single ``lookup`` serves both address and PTR style questions.
"""

from __future__ import annotations

import ntpath
import sys
import types
from typing import Iterable, Mapping

import dns.name
import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.rrset
from dns.rdtypes.ANY.PTR import PTR
from dns.rdtypes.IN.A import A
from dns.rdtypes.IN.AAAA import AAAA

from dnsconf.env import Env, load_env
from dnsconf.logging import Logger
from dnsconf.logging.dnsconf_logging_models import (
    HostsLoaded,
    HostsNameDropped,
    HostsSystemFallback,
)
from dnsconf.shared import (
    DNSConfigError,
    InvalidNameError,
    fqdn,
    is_name,
    iter_lines,
    normalize_text,
    parse_ip,
    read_text,
    read_text_async,
    reverse_name,
)

from .models import HostEntry


HOSTS_TTL = 300
LOCALDOMAIN_SUFFIX = ".localdomain."

RdataTypeLike = dns.rdatatype.RdataType | int | str


class HostsDB:
    """
    Forward and reverse indexes over static host entries.

    Not safe for concurrent mutation. Hand readers a ``clone()`` and
    refresh a separate copy instead.

    Usage:
        hosts = HostsDB.load_system()

        entry = hosts.lookup("localhost")
        answer = hosts.query("1.0.0.127.in-addr.arpa.", "PTR")
    """

    def __init__(self) -> None:
        self._forward: dict[str, HostEntry] = {}
        self._reverse: dict[str, str] = {}
        self._logger = Logger()

    def __len__(self) -> int:
        return len(self._forward)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    @property
    def forward(self) -> Mapping[str, HostEntry]:
        """Read-only view of name to entry."""
        return types.MappingProxyType(self._forward)

    @property
    def reverse(self) -> Mapping[str, str]:
        """Read-only view of reverse-lookup key to forward name."""
        return types.MappingProxyType(self._reverse)

    def inject(self, other: HostsDB) -> HostsDB:
        """Replace this database's contents with a deep copy of another's."""
        self.clear_hosts()

        for name, entry in other._forward.items():
            self._forward[name] = entry.clone()

        self._reverse.update(other._reverse)

        return self

    def clone(self) -> HostsDB:
        return type(self)().inject(self)

    def clear(self) -> HostsDB:
        return self.clear_hosts()

    def clear_hosts(self) -> HostsDB:
        self._forward.clear()
        self._reverse.clear()
        return self

    def get_system(self, env: Env | None = None) -> str:
        """
        Return the platform's hosts file path.

        On Windows the path is rooted at ``SystemRoot`` (``C:\\Windows``
        when unset).
        """
        if sys.platform == "win32":
            if env is None:
                env = load_env(Env)

            root = env.SystemRoot or "C:\\Windows"
            return ntpath.join(root, "System32", "Drivers", "etc", "hosts")

        return "/etc/hosts"

    def get_hosts(self) -> list[tuple[str, str]]:
        hosts: list[tuple[str, str]] = []

        for name, entry in self._forward.items():
            if entry.inet4:
                hosts.append((name, entry.inet4))

            if entry.inet6:
                hosts.append((name, entry.inet6))

        return hosts

    def set_hosts(self, hosts: Iterable[tuple[str, str]]) -> HostsDB:
        """
        Replace all entries with ``(name, address)`` pairs.

        Raises:
            DNSConfigError: If any pair is invalid. Entries added before the
                failing pair are kept.
        """
        self.clear_hosts()

        for name, address in hosts:
            self.add_host(name, address)

        return self

    def set_default(self) -> HostsDB:
        return self.set_local()

    def set_local(self) -> HostsDB:
        self.clear_hosts()
        self.add_host("localhost", "127.0.0.1")
        self.add_host("localhost", "::1")
        return self

    @staticmethod
    def _normalize_name(name: str) -> str:
        name = fqdn(name.lower())

        if name.endswith(LOCALDOMAIN_SUFFIX):
            name = name[: -len(LOCALDOMAIN_SUFFIX) + 1]

        return name

    def add_host(
        self,
        name: str,
        address: str,
        hostname: str | None = None,
    ) -> HostEntry:
        """
        Bind an address to a name, creating or updating its entry.

        The address replaces any earlier address of the same family. The
        other family's address is left as it was.

        Args:
            name: Host name. Lowercased and made fully qualified; a trailing
                ``.localdomain.`` is stripped
            address: IPv4 or IPv6 address text
            hostname: Optional canonical alias

        Returns:
            The created or updated HostEntry

        Raises:
            InvalidNameError: If name or hostname is not a valid domain name
            AddressError: If address is not an IP address
        """
        name = fqdn(name.lower())

        if not is_name(name):
            raise InvalidNameError(name)

        name = self._normalize_name(name)

        if hostname:
            hostname = fqdn(hostname.lower())

            if not is_name(hostname):
                raise InvalidNameError(hostname, "Invalid hostname.")

        ip = parse_ip(address)
        canonical = str(ip)
        reverse_key = reverse_name(canonical)

        entry = self._forward.get(name)
        if entry is None:
            entry = HostEntry(name=name)

        if ip.version == 4:
            previous = entry.inet4
            entry.inet4 = canonical

        else:
            previous = entry.inet6
            entry.inet6 = canonical

        if previous and previous != canonical:
            self._discard_reverse(reverse_name(previous), name)

        if hostname:
            entry.hostname = hostname

        self._forward[name] = entry
        self._reverse[reverse_key] = name

        return entry

    def _discard_reverse(self, reverse_key: str, name: str):
        if self._reverse.get(reverse_key) == name:
            del self._reverse[reverse_key]

    def lookup(self, name: str) -> HostEntry | None:
        """
        Find an entry by forward name or by reverse-lookup key.

        Args:
            name: A host name (``localhost``) or reverse name
                (``1.0.0.127.in-addr.arpa``), in any case

        Returns:
            The matching HostEntry, or None
        """
        key = fqdn(name.lower())

        forward_name = self._reverse.get(key)
        if forward_name:
            return self._forward.get(forward_name)

        return self._forward.get(self._normalize_name(key))

    def query(
        self,
        name: str,
        rdtype: RdataTypeLike,
    ) -> list[dns.rrset.RRset] | None:
        """
        Synthesize answer records for a name from static entries.

        Args:
            name: The query name
            rdtype: Query type. A, AAAA, PTR and ANY produce records; any
                other type produces an empty answer

        Returns:
            None if the name is unknown, otherwise a (possibly empty) list of
            RRsets, one per record, each with TTL 300 and class IN
        """
        rdtype = dns.rdatatype.RdataType.make(rdtype)

        entry = self.lookup(name)
        if entry is None:
            return None

        owner = dns.name.from_text(name)

        if rdtype == dns.rdatatype.PTR:
            target = dns.name.from_text(entry.name)
            return [
                self._to_record(
                    owner,
                    PTR(dns.rdataclass.IN, dns.rdatatype.PTR, target),
                )
            ]

        answer: list[dns.rrset.RRset] = []

        if rdtype in (dns.rdatatype.A, dns.rdatatype.ANY) and entry.inet4:
            answer.append(
                self._to_record(
                    owner,
                    A(dns.rdataclass.IN, dns.rdatatype.A, entry.inet4),
                )
            )

        if rdtype in (dns.rdatatype.AAAA, dns.rdatatype.ANY) and entry.inet6:
            answer.append(
                self._to_record(
                    owner,
                    AAAA(dns.rdataclass.IN, dns.rdatatype.AAAA, entry.inet6),
                )
            )

        return answer

    @staticmethod
    def _to_record(
        owner: dns.name.Name,
        rdata: dns.rdata.Rdata,
    ) -> dns.rrset.RRset:
        return dns.rrset.from_rdata(owner, HOSTS_TTL, rdata)

    def from_string(self, text: str) -> HostsDB:
        """
        Replace all entries with those parsed from hosts-file text.

        Each line is ``IP name [name ...]``. When a line carries more than
        one name, the last one is taken as the canonical hostname for the
        rest. Names that fail validation are dropped individually.
        """
        self.clear_hosts()

        text = normalize_text(text).lower()

        for line_number, line in iter_lines(text):
            parts = line.split()
            address = parts[0]

            hostname: str | None = None
            if len(parts) > 2:
                hostname = parts.pop()

            for name in parts[1:]:
                try:
                    self.add_host(name, address, hostname)

                except DNSConfigError as err:
                    self._logger.emit(
                        HostsNameDropped(
                            message=str(err),
                            line_number=line_number,
                            name=name,
                            address=address,
                        ),
                        name="hosts",
                    )

        return self

    def from_file(self, path: str) -> HostsDB:
        self.from_string(read_text(path))

        self._logger.emit(
            HostsLoaded(
                message=f"Loaded hosts from {path}",
                path=path,
                entries=len(self),
            ),
            name="hosts",
        )

        return self

    async def from_file_async(self, path: str) -> HostsDB:
        self.from_string(await read_text_async(path))

        await self._logger.log(
            HostsLoaded(
                message=f"Loaded hosts from {path}",
                path=path,
                entries=len(self),
            ),
            name="hosts",
        )

        return self

    def from_system(self) -> HostsDB:
        """Load the platform hosts file, falling back to localhost-only entries."""
        path = self.get_system()

        try:
            return self.from_file(path)

        except Exception as err:
            self._logger.emit(
                HostsSystemFallback(
                    message=f"Could not load {path}, using localhost defaults",
                    path=path,
                    error=str(err),
                ),
                name="hosts",
            )

            return self.set_local()

    async def from_system_async(self) -> HostsDB:
        path = self.get_system()

        try:
            return await self.from_file_async(path)

        except Exception as err:
            await self._logger.log(
                HostsSystemFallback(
                    message=f"Could not load {path}, using localhost defaults",
                    path=path,
                    error=str(err),
                ),
                name="hosts",
            )

            return self.set_local()

    @classmethod
    def load_string(cls, text: str) -> HostsDB:
        return cls().from_string(text)

    @classmethod
    def load_file(cls, path: str) -> HostsDB:
        return cls().from_file(path)

    @classmethod
    async def load_file_async(cls, path: str) -> HostsDB:
        return await cls().from_file_async(path)

    @classmethod
    def load_system(cls) -> HostsDB:
        return cls().from_system()

    @classmethod
    async def load_system_async(cls) -> HostsDB:
        return await cls().from_system_async()
