class DNSConfigError(Exception):
    """Base class for errors raised while building a hosts or resolver config."""
    pass


class InvalidNameError(DNSConfigError):
    """Raised when a domain name fails syntax validation."""

    def __init__(self, name: str, message: str = "Invalid name."):
        self.name = name
        super().__init__(f"{message} ({name!r})")


class AddressError(DNSConfigError):
    """Raised when an address string cannot be parsed."""
    pass


class ListTooLargeError(DNSConfigError):
    """Raised when a search or sort list would exceed its capacity."""
    pass


class ServerUnavailableError(DNSConfigError):
    """Raised when no nameserver is configured for the requested family."""
    pass
