"""
Hosts database and stub-resolver configuration models.

    from dnsconf import HostsDB, ResolverConfig

    hosts = HostsDB.load_system()
    config = ResolverConfig.load_system()
"""

from .env import (
    Env as Env,
    load_env as load_env,
)
from .hosts import (
    HostEntry as HostEntry,
    HostsDB as HostsDB,
)
from .resolv import (
    ResolverConfig as ResolverConfig,
    ServerAddress as ServerAddress,
    SortEntry as SortEntry,
)
from .shared import (
    AddressError as AddressError,
    DNSConfigError as DNSConfigError,
    InvalidNameError as InvalidNameError,
    ListTooLargeError as ListTooLargeError,
    ServerUnavailableError as ServerUnavailableError,
)
