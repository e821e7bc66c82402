from .models import Entry, LogLevel


class HostsNameDropped(Entry, kw_only=True):
    line_number: int
    name: str
    address: str
    level: LogLevel = LogLevel.DEBUG

class HostsLoaded(Entry, kw_only=True):
    path: str
    entries: int
    level: LogLevel = LogLevel.DEBUG

class HostsSystemFallback(Entry, kw_only=True):
    path: str
    error: str
    level: LogLevel = LogLevel.WARN

class ResolverDirectiveDropped(Entry, kw_only=True):
    directive: str
    value: str
    error: str
    level: LogLevel = LogLevel.DEBUG

class ResolverOptionIgnored(Entry, kw_only=True):
    option: str
    level: LogLevel = LogLevel.DEBUG

class ResolverLoaded(Entry, kw_only=True):
    path: str
    servers: int
    level: LogLevel = LogLevel.DEBUG

class ResolverSystemFallback(Entry, kw_only=True):
    path: str | None
    error: str | None
    level: LogLevel = LogLevel.WARN

class ResolverEnvApplied(Entry, kw_only=True):
    variable: str
    value: str
    level: LogLevel = LogLevel.DEBUG
