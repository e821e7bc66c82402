"""
Stub resolver configuration, loaded from an ``/etc/resolv.conf``-style
file and the ``LOCALDOMAIN`` / ``RES_OPTIONS`` environment variables.

Setters (``add_server``, ``set_domain``, ``set_search``, ``set_sort``,
``set_servers``) raise on bad input. The ``parse_*`` wrappers used while
reading a file drop the bad directive and keep going, so a partly
corrupt file still yields the rest of its configuration.
"""

from __future__ import annotations

import sys
from typing import Callable, Iterable

from dnsconf.env import Env, load_env
from dnsconf.logging import Logger
from dnsconf.logging.dnsconf_logging_models import (
    ResolverDirectiveDropped,
    ResolverEnvApplied,
    ResolverLoaded,
    ResolverOptionIgnored,
    ResolverSystemFallback,
)
from dnsconf.shared import (
    AddressError,
    DNSConfigError,
    InvalidNameError,
    ListTooLargeError,
    ServerAddress,
    ServerUnavailableError,
    fqdn,
    is_name,
    iter_lines,
    normalize_ip,
    normalize_text,
    parse_server_address,
    parse_u8,
    random_item,
    read_text,
    read_text_async,
)

from .constants import (
    DEFAULT_ATTEMPTS,
    DEFAULT_NDOTS,
    DEFAULT_TIMEOUT,
    GOOGLE_NS,
    LOCAL_NS,
    MAX_ATTEMPTS,
    MAX_NDOTS,
    MAX_TIMEOUT,
    OPENDNS_NS,
    RESOLV_CONF_PATH,
)
from .models import (
    MAX_SEARCH_DOMAINS,
    MAX_SEARCH_LENGTH,
    MAX_SORTLIST,
    DomainSuffix,
    NoSearch,
    SearchList,
    SearchPolicy,
    SortEntry,
)


# option name -> (attribute, ceiling)
NUMERIC_OPTIONS: dict[str, tuple[str, int]] = {
    "ndots": ("dots", MAX_NDOTS),
    "timeout": ("timeout", MAX_TIMEOUT),
    "attempts": ("attempts", MAX_ATTEMPTS),
}

# option name -> (attribute, value)
FLAG_OPTIONS: dict[str, tuple[str, bool]] = {
    "debug": ("debug", True),
    "rotate": ("rotate", True),
    "no-check-names": ("check_names", False),
    "inet6": ("inet6", True),
    "ip6-bytestring": ("byte_string", True),
    "ip6-dotint": ("dot_int", True),
    "no-ip6-dotint": ("dot_int", False),
    "edns0": ("edns", True),
    "single-request": ("single_request", True),
    "single-request-reopen": ("single_request_reopen", True),
    "no-tld-query": ("tld_query", False),
    "use-vc": ("force_tcp", True),
}

OPTION_DEFAULTS: dict[str, int | bool] = {
    "debug": False,
    "dots": DEFAULT_NDOTS,
    "timeout": DEFAULT_TIMEOUT,
    "attempts": DEFAULT_ATTEMPTS,
    "rotate": False,
    "check_names": True,
    "inet6": False,
    "byte_string": False,
    "dot_int": False,
    "edns": False,
    "single_request": False,
    "single_request_reopen": False,
    "tld_query": True,
    "force_tcp": False,
}


class ResolverConfig:
    """
    Nameservers, search policy, sortlist, and resolver options.

    Not safe for concurrent mutation. Hand readers a ``clone()`` and
    refresh a separate copy instead.

    Usage:
        config = ResolverConfig.load_system()

        server = config.random_server(prefer_ipv6=False)
        print(server.host, server.port)
    """

    def __init__(self) -> None:
        self.ns4: list[ServerAddress] = []
        self.ns6: list[ServerAddress] = []
        # ServerAddress.hostname -> key, as listed by get_servers()
        self.keys: dict[str, str] = {}
        self.policy: SearchPolicy = NoSearch()
        self.sortlist: list[SortEntry] = []

        self.debug = False
        self.dots = DEFAULT_NDOTS
        self.timeout = DEFAULT_TIMEOUT
        self.attempts = DEFAULT_ATTEMPTS
        self.rotate = False
        self.check_names = True
        self.inet6 = False
        self.byte_string = False
        self.dot_int = False
        self.edns = False
        self.single_request = False
        self.single_request_reopen = False
        self.tld_query = True
        self.force_tcp = False

        self._logger = Logger()

        self._directives: dict[str, Callable[[str], ResolverConfig]] = {
            "nameserver": self.parse_server,
            "domain": self.parse_domain,
            "search": self.parse_search,
            "sortlist": self.parse_sort,
            "options": self.parse_options,
        }

    @property
    def domain(self) -> str | None:
        if isinstance(self.policy, DomainSuffix):
            return self.policy.domain

        return None

    @property
    def search(self) -> list[str] | None:
        if isinstance(self.policy, SearchList):
            return list(self.policy.names)

        return None

    def inject(self, other: ResolverConfig) -> ResolverConfig:
        """Copy every field of another config into this one."""
        self.ns4 = list(other.ns4)
        self.ns6 = list(other.ns6)
        self.keys = dict(other.keys)
        self.policy = other.policy
        self.sortlist = list(other.sortlist)

        for attribute in OPTION_DEFAULTS:
            setattr(self, attribute, getattr(other, attribute))

        return self

    def clone(self) -> ResolverConfig:
        return type(self)().inject(self)

    def clear(self) -> ResolverConfig:
        self.clear_servers()
        self.policy = NoSearch()
        self.sortlist = []

        for attribute, value in OPTION_DEFAULTS.items():
            setattr(self, attribute, value)

        return self

    def get_system(self) -> str | None:
        if sys.platform == "win32":
            return None

        return RESOLV_CONF_PATH

    def get_servers(self) -> list[str]:
        """Return every server's display string, IPv4 servers first."""
        return [address.hostname for address in (*self.ns4, *self.ns6)]

    def set_servers(self, servers: Iterable[str]) -> ResolverConfig:
        """
        Replace all servers.

        Raises:
            AddressError: If any address is invalid. Servers added before the
                failing one are kept.
        """
        self.clear_servers()

        for server in servers:
            self.add_server(server)

        return self

    def clear_servers(self) -> ResolverConfig:
        self.ns4.clear()
        self.ns6.clear()
        self.keys.clear()
        return self

    def set_default(self) -> ResolverConfig:
        return self.set_google()

    def set_local(self) -> ResolverConfig:
        return self.set_servers(LOCAL_NS)

    def set_google(self) -> ResolverConfig:
        return self.set_servers(GOOGLE_NS)

    def set_opendns(self) -> ResolverConfig:
        return self.set_servers(OPENDNS_NS)

    def random_server(self, prefer_ipv6: bool = False) -> ServerAddress:
        """
        Pick a server uniformly at random.

        Args:
            prefer_ipv6: Choose from the IPv6 servers when any are configured

        Returns:
            The chosen ServerAddress

        Raises:
            ServerUnavailableError: If no server of a usable family exists
        """
        if prefer_ipv6 and self.ns6:
            return random_item(self.ns6)

        if not self.ns4:
            raise ServerUnavailableError("No servers available.")

        return random_item(self.ns4)

    def add_server(self, server: str) -> ServerAddress:
        """
        Append a nameserver.

        Args:
            server: Address string, ``[key@]host[:port][#key]``

        Returns:
            The parsed ServerAddress

        Raises:
            AddressError: If the string is not an IPv4 or IPv6 server address
        """
        address = parse_server_address(server)

        match address.family:
            case 4:
                self.ns4.append(address)

            case 6:
                self.ns6.append(address)

            case _:
                raise AddressError("Invalid address.")

        if address.key:
            self.keys[address.hostname] = address.key

        return address

    def set_domain(self, domain: str) -> ResolverConfig:
        if not is_name(domain):
            raise InvalidNameError(domain, "Invalid domain.")

        self.policy = DomainSuffix(fqdn(domain))

        return self

    def set_search(self, names: str) -> ResolverConfig:
        """
        Set the search list from whitespace-separated names.

        Invalid names are skipped.

        Raises:
            ListTooLargeError: If the text exceeds 256 characters or holds
                more than six valid names. The current policy is unchanged.
        """
        if len(names) > MAX_SEARCH_LENGTH:
            raise ListTooLargeError("Search list too large.")

        search = [fqdn(name) for name in names.split() if is_name(name)]

        if len(search) > MAX_SEARCH_DOMAINS:
            raise ListTooLargeError("Search list too large.")

        self.policy = SearchList(tuple(search))

        return self

    def set_sort(self, pairs: str) -> ResolverConfig:
        """
        Append ``ip[/mask]`` pairs to the sortlist.

        Pairs with an unparseable address or mask are skipped.

        Raises:
            ListTooLargeError: If the sortlist would exceed ten entries. The
                current sortlist is unchanged.
        """
        entries: list[SortEntry] = []

        for pair in pairs.split():
            ip, _, mask = pair.partition("/")

            try:
                entry = SortEntry(
                    ip=normalize_ip(ip),
                    mask=normalize_ip(mask) if mask else None,
                )

            except AddressError:
                continue

            entries.append(entry)

        if len(self.sortlist) + len(entries) > MAX_SORTLIST:
            raise ListTooLargeError("Sort list too large.")

        self.sortlist.extend(entries)

        return self

    def _parse_directive(
        self,
        directive: str,
        text: str,
        setter: Callable[[str], object],
    ) -> ResolverConfig:
        value = text.strip().lower()

        try:
            setter(value)

        except DNSConfigError as err:
            self._logger.emit(
                ResolverDirectiveDropped(
                    message=str(err),
                    directive=directive,
                    value=value,
                    error=type(err).__name__,
                ),
                name="resolver",
            )

        return self

    def parse_server(self, text: str) -> ResolverConfig:
        return self._parse_directive("nameserver", text, self.add_server)

    def parse_domain(self, text: str) -> ResolverConfig:
        return self._parse_directive("domain", text, self.set_domain)

    def parse_search(self, text: str) -> ResolverConfig:
        return self._parse_directive("search", text, self.set_search)

    def parse_sort(self, text: str) -> ResolverConfig:
        return self._parse_directive("sortlist", text, self.set_sort)

    def parse_options(self, line: str) -> ResolverConfig:
        """
        Apply an ``options`` line.

        Each token is a flag (``rotate``) or ``name:value`` (``ndots:2``).
        Numeric values are clamped to their ceiling. Unknown names and bad
        numbers are ignored token by token.
        """
        for option in line.strip().lower().split():
            name, _, argument = option.partition(":")

            if flag := FLAG_OPTIONS.get(name):
                attribute, value = flag
                setattr(self, attribute, value)
                continue

            if numeric := NUMERIC_OPTIONS.get(name):
                attribute, ceiling = numeric

                try:
                    setattr(self, attribute, min(ceiling, parse_u8(argument)))
                    continue

                except ValueError:
                    pass

            self._logger.emit(
                ResolverOptionIgnored(
                    message=f"Ignoring option {option!r}",
                    option=option,
                ),
                name="resolver",
            )

        return self

    def from_string(self, text: str) -> ResolverConfig:
        """
        Replace this config with one parsed from resolv.conf text.

        Unknown directives and malformed values are skipped.
        """
        self.clear()

        for _, line in iter_lines(normalize_text(text)):
            directive, separator, rest = line.partition(" ")

            if not separator:
                continue

            if parse := self._directives.get(directive.lower()):
                parse(rest)

        return self

    def read_env(self, env: Env | None = None) -> ResolverConfig:
        """Apply ``LOCALDOMAIN`` and ``RES_OPTIONS`` over the current settings."""
        if env is None:
            env = load_env(Env)

        if env.LOCALDOMAIN:
            self.parse_domain(env.LOCALDOMAIN)
            self._logger.emit(
                ResolverEnvApplied(
                    message="Applied LOCALDOMAIN",
                    variable="LOCALDOMAIN",
                    value=env.LOCALDOMAIN,
                ),
                name="resolver",
            )

        if env.RES_OPTIONS:
            self.parse_options(env.RES_OPTIONS)
            self._logger.emit(
                ResolverEnvApplied(
                    message="Applied RES_OPTIONS",
                    variable="RES_OPTIONS",
                    value=env.RES_OPTIONS,
                ),
                name="resolver",
            )

        return self

    def from_file(self, path: str) -> ResolverConfig:
        self.from_string(read_text(path))

        self._logger.emit(
            ResolverLoaded(
                message=f"Loaded resolver config from {path}",
                path=path,
                servers=len(self.ns4) + len(self.ns6),
            ),
            name="resolver",
        )

        return self

    async def from_file_async(self, path: str) -> ResolverConfig:
        self.from_string(await read_text_async(path))

        await self._logger.log(
            ResolverLoaded(
                message=f"Loaded resolver config from {path}",
                path=path,
                servers=len(self.ns4) + len(self.ns6),
            ),
            name="resolver",
        )

        return self

    def _fall_back(self, path: str | None, error: Exception | None):
        self.clear()
        self.set_default()

        return ResolverSystemFallback(
            message="Using default nameservers",
            path=path,
            error=str(error) if error else None,
        )

    def from_system(self, env: Env | None = None) -> ResolverConfig:
        """
        Load the platform resolv.conf, falling back to the default public
        nameservers, then apply environment overrides.
        """
        path = self.get_system()

        if path:
            try:
                self.from_file(path)

            except Exception as err:
                self._logger.emit(self._fall_back(path, err), name="resolver")

        else:
            self._logger.emit(self._fall_back(path, None), name="resolver")

        return self.read_env(env)

    async def from_system_async(self, env: Env | None = None) -> ResolverConfig:
        path = self.get_system()

        if path:
            try:
                await self.from_file_async(path)

            except Exception as err:
                await self._logger.log(self._fall_back(path, err), name="resolver")

        else:
            await self._logger.log(self._fall_back(path, None), name="resolver")

        return self.read_env(env)

    @classmethod
    def load_string(cls, text: str) -> ResolverConfig:
        return cls().from_string(text)

    @classmethod
    def load_file(cls, path: str) -> ResolverConfig:
        return cls().from_file(path)

    @classmethod
    async def load_file_async(cls, path: str) -> ResolverConfig:
        return await cls().from_file_async(path)

    @classmethod
    def load_system(cls, env: Env | None = None) -> ResolverConfig:
        return cls().from_system(env)

    @classmethod
    async def load_system_async(cls, env: Env | None = None) -> ResolverConfig:
        return await cls().from_system_async(env)
